import ipaddress
import netbridge
import pytest

from netbridge import descriptor
from netbridge import errors
from netbridge import values
from netbridge import wire
from netbridge.unpack import to_runtime


def test_scalars():

    assert to_runtime(wire.WireBool(True), descriptor.BOOL) == values.make_bool(True)
    assert to_runtime(wire.WireCount(7), descriptor.COUNT) == values.make_count(7)
    assert to_runtime(wire.WireCount(7), descriptor.COUNTER) == values.make_counter(7)
    assert to_runtime(wire.WireInteger(-7), descriptor.INT) == values.make_int(-7)
    assert to_runtime(wire.WireReal(0.5), descriptor.DOUBLE) == values.make_double(0.5)
    assert to_runtime(wire.WireString('x'), descriptor.STRING) == values.make_string('x')
    assert to_runtime(wire.WireTimestamp(1500000000), descriptor.TIME) == values.make_time(1.5)
    assert to_runtime(wire.WireTimespan(250000000), descriptor.INTERVAL) == values.make_interval(0.25)


def test_addresses():

    value = to_runtime(wire.WireAddress.of('192.168.0.1'), descriptor.ADDR)
    assert value.value == ipaddress.IPv4Address('192.168.0.1')

    value = to_runtime(wire.WireAddress.of('2001:db8::1'), descriptor.ADDR)
    assert value.value == ipaddress.IPv6Address('2001:db8::1')

    value = to_runtime(wire.WireSubnet.of('192.168.0.0/16'), descriptor.SUBNET)
    assert value.value == ipaddress.IPv4Network('192.168.0.0/16')


def test_ports():

    value = to_runtime(wire.WirePort(53, wire.TransportProto.UDP), descriptor.PORT)
    assert value == values.make_port(53, 'udp')
    assert str(value.value) == '53/udp'


def test_enum(proto_type):

    value = to_runtime(wire.WireEnum('tcp'), proto_type)
    assert value.value == 1

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireEnum('sctp'), proto_type)


def test_mismatch():

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireCount(1), descriptor.INT)

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireNone(), descriptor.COUNT)

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireVector.of(), descriptor.COUNT)

    # Every conversion failure is a ConversionError.

    with pytest.raises(errors.ConversionError):
        to_runtime(wire.WireString('1'), descriptor.COUNT)


def test_tables():

    type = descriptor.TableType(descriptor.STRING, descriptor.COUNT)
    data = wire.WireTable.of({wire.WireString('a'): wire.WireCount(1), wire.WireString('b'): wire.WireCount(2)})

    table = to_runtime(data, type)
    assert len(table) == 2
    assert table.lookup(values.make_string('b')) == values.make_count(2)

    type = descriptor.SetType(descriptor.ADDR, descriptor.PORT)
    key = wire.WireVector.of((wire.WireAddress.of('10.0.0.1'), wire.WirePort(80, wire.TransportProto.TCP)))

    members = to_runtime(wire.WireSet.of((key,)), type)
    assert (values.make_addr('10.0.0.1'), values.make_port(80, 'tcp')) in members


def test_records(conn_type):

    data = wire.WireVector.of((wire.WireString('C1'), wire.WireAddress.of('10.0.0.1')))
    record = to_runtime(data, conn_type)

    assert record['uid'] == values.make_string('C1')
    assert record['service'] is None
    assert record['duration'] is None

    data = wire.WireVector.of((wire.WireString('C1'), wire.WireAddress.of('10.0.0.1'), wire.WireNone(), wire.WireTimespan(1000000000)))
    record = to_runtime(data, conn_type)

    assert record['service'] is None
    assert record['duration'] == values.make_interval(1.0)

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireVector.of((wire.WireString('C1'),)), conn_type)

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireVector.of((wire.WireString('C1'), wire.WireNone())), conn_type)


def test_extra_record_elements(conn_type):

    # Trailing elements beyond the declared fields are ignored.

    data = wire.WireVector.of((
        wire.WireString('C1'),
        wire.WireAddress.of('10.0.0.1'),
        wire.WireString('dns'),
        wire.WireTimespan(0),
        wire.WireCount(99)))

    record = to_runtime(data, conn_type)
    assert record['service'] == values.make_string('dns')


def test_functions(env):

    value = to_runtime(wire.WireVector.of((wire.WireString('double'),)), descriptor.FuncType(), env)
    assert value.function(21) == 42

    # Resolution returns the entity already in scope, not a copy of it.

    assert value is env.scope.lookup('double')

    with pytest.raises(errors.ResolutionError):
        to_runtime(wire.WireVector.of((wire.WireString('missing'),)), descriptor.FuncType(), env)

    with pytest.raises(errors.ResolutionError):
        to_runtime(wire.WireVector.of((wire.WireString('not_a_function'),)), descriptor.FuncType(), env)


def test_captures(env, closure):

    closure.update_captures({'label': values.make_string('old')})

    pairs = list()
    pairs.append(wire.WireVector.of((wire.WireString('count'), wire.WireCount(3))))
    pairs.append(wire.WireVector.of((wire.WireString('label'), wire.WireNone())))

    data = wire.WireVector.of((wire.WireString(closure.name), wire.WireVector.of(pairs)))
    value = to_runtime(data, descriptor.FuncType(), env)

    assert value.function is closure
    assert closure.captures == {'count': values.make_count(3)}

    pairs = (wire.WireVector.of((wire.WireString('count'), wire.WireString('three'))),)
    data = wire.WireVector.of((wire.WireString(closure.name), wire.WireVector.of(pairs)))

    with pytest.raises(errors.ResolutionError):
        to_runtime(data, descriptor.FuncType(), env)

    # A rejected snapshot leaves the captured state alone.

    assert closure.captures == {'count': values.make_count(3)}


def test_patterns():

    data = wire.WireVector.of((wire.WireString('^ab+$'), wire.WireString('ab+')))
    pattern = to_runtime(data, descriptor.PATTERN)

    assert pattern.match_exactly('abbb')
    assert pattern.match_exactly('xabb') == False
    assert pattern.match_anywhere('xabb')

    with pytest.raises(errors.ShapeMismatch):
        to_runtime(wire.WireVector.of((wire.WireString('['), wire.WireString('['))), descriptor.PATTERN)


def test_any():

    data = wire.WireVector.of((wire.WireCount(1), wire.WireString('two')))
    value = to_runtime(data, descriptor.ANY)

    assert isinstance(value, netbridge.DataValue)
    assert value.data is data


def test_nesting():

    type = descriptor.VectorType(descriptor.VectorType(descriptor.COUNT))
    data = wire.WireVector.of((wire.WireVector.of((wire.WireCount(1),)),))

    to_runtime(data, type, netbridge.Environment(max_depth=3))

    with pytest.raises(errors.NestingTooDeep):
        to_runtime(data, type, netbridge.Environment(max_depth=2))

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
