import ipaddress
import re
import netbridge
import pytest

from netbridge import descriptor
from netbridge import values
from netbridge.descriptor import RecordField


def test_scalars(proto_type):

    assert values.make_count(1) == values.make_count(1)
    assert values.make_count(1) != values.make_counter(1)
    assert values.make_addr('10.0.0.1').value == ipaddress.IPv4Address('10.0.0.1')
    assert values.make_subnet('10.1.0.0/8').value == ipaddress.IPv4Network('10.0.0.0/8')

    port = values.make_port(443, 'tcp')
    assert port.value.number == 443
    assert str(port.value) == '443/tcp'

    assert values.make_enum(proto_type, 'icmp').value == 3

    with pytest.raises(ValueError):
        values.make_enum(proto_type, 'sctp')

    with pytest.raises(KeyError):
        values.make_port(1, 'sctp')


def test_sets():

    type = descriptor.SetType(descriptor.STRING)
    members = values.TableValue(type)
    members.assign(values.make_string('a'))

    assert values.make_string('a') in members
    assert members.is_set()

    with pytest.raises(ValueError):
        members.assign(values.make_string('b'), values.make_count(1))

    with pytest.raises(ValueError):
        members.assign((values.make_string('b'), values.make_string('c')))

    members.remove(values.make_string('a'))
    assert len(members) == 0

    with pytest.raises(TypeError):
        values.TableValue(descriptor.COUNT)


def test_tables():

    type = descriptor.TableType(descriptor.STRING, descriptor.COUNT)
    table = values.TableValue(type)

    with pytest.raises(ValueError):
        table.assign(values.make_string('a'))

    table.assign(values.make_string('a'), values.make_count(1))
    assert table.lookup(values.make_string('a')) == values.make_count(1)
    assert table.lookup(values.make_string('b')) is None

    # Tables hash by content, so they can index other tables.

    other = values.TableValue(type)
    other.assign(values.make_string('a'), values.make_count(1))
    assert hash(other) == hash(table)

    outer = values.TableValue(descriptor.SetType(type))
    outer.assign(table)
    assert other in outer


def test_vectors():

    type = descriptor.VectorType(descriptor.COUNT)
    vector = values.VectorValue(type)
    vector.assign(3, values.make_count(3))

    assert vector.size() == 4
    assert vector.lookup(0) is None
    assert vector.lookup(3) == values.make_count(3)
    assert vector.lookup(10) is None

    with pytest.raises(IndexError):
        vector.assign(-1, values.make_count(0))


def test_records(conn_type):

    record = values.RecordValue(conn_type, uid=values.make_string('C1'))
    assert record['uid'] == values.make_string('C1')
    assert record.lookup(1) is None

    with pytest.raises(KeyError):
        record['missing']

    default = values.make_string('-')
    fields = (RecordField('a', descriptor.STRING, optional=True, default=default),)
    record = values.RecordValue(descriptor.RecordType('defaulted', fields))

    assert record.lookup('a') is None
    assert record.lookup_with_default('a') == default


def test_patterns():

    pattern = values.PatternValue('foo[0-9]+')
    assert pattern.match_exactly('foo12')
    assert pattern.match_exactly('xfoo12') == False
    assert pattern.match_anywhere('xfoo12')

    with pytest.raises(re.error):
        values.PatternValue('(')


def test_descriptors():

    assert descriptor.SetType(descriptor.COUNT) == descriptor.SetType(descriptor.COUNT)
    assert descriptor.SetType(descriptor.COUNT) != descriptor.TableType(descriptor.COUNT, descriptor.COUNT)
    assert descriptor.VectorType(descriptor.INT) != descriptor.VectorType(descriptor.COUNT)

    labels = descriptor.EnumType('level', {'low': 10, 'high': 20})
    assert labels.ordinal('high') == 20
    assert labels.label(10) == 'low'
    assert labels.label(15) is None

    with pytest.raises(ValueError):
        descriptor.SetType()


def test_min_length(conn_type):

    assert conn_type.min_length == 2
    assert conn_type.num_fields == 4
    assert conn_type.field_index('service') == 2

    fields = list()
    fields.append(RecordField('a', descriptor.COUNT, optional=True))
    fields.append(RecordField('b', descriptor.COUNT))
    fields.append(RecordField('c', descriptor.COUNT, optional=True))

    assert descriptor.RecordType('gap', fields).min_length == 2
    assert descriptor.RecordType('none', fields[2:]).min_length == 0

    with pytest.raises(ValueError):
        descriptor.RecordType('twice', (fields[0], fields[0]))


def test_functions(closure):

    assert closure.is_lambda()
    assert closure(3) == 3

    closure.update_captures({'count': values.make_count(1)})
    assert closure.captures['count'] == values.make_count(1)

    closure.update_captures({'count': None})
    assert 'count' not in closure.captures

    with pytest.raises(KeyError):
        closure.update_captures({'other': values.make_count(1)})

    plain = netbridge.scope.Function('plain')
    assert plain.is_lambda() == False

    with pytest.raises(ValueError):
        plain.update_captures({})

    with pytest.raises(RuntimeError):
        plain()


def test_scope():

    scope = netbridge.scope.Scope()
    value = scope.define_function(netbridge.scope.Function('f'))

    assert 'f' in scope
    assert scope.lookup('f') is value
    assert scope.lookup('g') is None
    assert value == values.FuncValue(value.function)
    assert value != values.FuncValue(netbridge.scope.Function('f'))

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
