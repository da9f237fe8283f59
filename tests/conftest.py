import netbridge
import pytest

from netbridge import descriptor
from netbridge.descriptor import RecordField


@pytest.fixture
def closure():

    capture_types = dict()
    capture_types['count'] = descriptor.COUNT
    capture_types['label'] = descriptor.STRING

    return netbridge.scope.Function('lambda_<1234>', lambda x: x, capture_types)


@pytest.fixture
def env(closure):

    scope = netbridge.scope.Scope()
    scope.define_function(netbridge.scope.Function('double', lambda x: 2 * x))
    scope.define_function(closure)
    scope.define('not_a_function', netbridge.values.make_count(5))

    return netbridge.Environment(scope)


@pytest.fixture
def conn_type():

    fields = list()
    fields.append(RecordField('uid', descriptor.STRING))
    fields.append(RecordField('orig_h', descriptor.ADDR))
    fields.append(RecordField('service', descriptor.STRING, optional=True))
    fields.append(RecordField('duration', descriptor.INTERVAL, optional=True))

    return descriptor.RecordType('conn', fields)


@pytest.fixture
def proto_type():
    return descriptor.EnumType('transport_proto', ('unknown_transport', 'tcp', 'udp', 'icmp'))

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
