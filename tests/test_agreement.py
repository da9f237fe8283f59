import netbridge
import pytest

from netbridge import descriptor
from netbridge import errors
from netbridge import wire
from netbridge.iterators import SetIterator


def converts(data, type, env=None):

    try:
        netbridge.to_runtime(data, type, env)
    except errors.ConversionError:
        return False

    return True


def agree(cases, env=None):

    for data, type, expected in cases:
        checked = netbridge.type_check(data, type, env)
        assert checked == converts(data, type, env), (data, type)
        assert checked == expected, (data, type)


def test_scalars(proto_type):

    cases = list()
    cases.append((wire.WireCount(1), descriptor.COUNT, True))
    cases.append((wire.WireCount(1), descriptor.COUNTER, True))
    cases.append((wire.WireCount(1), descriptor.INT, False))
    cases.append((wire.WireInteger(1), descriptor.COUNT, False))
    cases.append((wire.WireNone(), descriptor.COUNT, False))
    cases.append((wire.WireString('x'), descriptor.FILE, True))
    cases.append((wire.WireString('x'), descriptor.PATTERN, False))
    cases.append((wire.WireEnum('tcp'), proto_type, True))
    cases.append((wire.WireEnum('sctp'), proto_type, False))
    cases.append((wire.WireEnum('tcp'), descriptor.STRING, False))
    cases.append((wire.WireNone(), descriptor.ANY, True))

    agree(cases)


def test_records(conn_type):

    uid = wire.WireString('C1')
    orig = wire.WireAddress.of('10.0.0.1')
    none = wire.WireNone()

    cases = list()
    cases.append((wire.WireVector.of((uid, orig)), conn_type, True))
    cases.append((wire.WireVector.of((uid, orig, none, none)), conn_type, True))
    cases.append((wire.WireVector.of((uid, orig, none, none, none)), conn_type, True))
    cases.append((wire.WireVector.of((uid,)), conn_type, False))
    cases.append((wire.WireVector.of((uid, none)), conn_type, False))
    cases.append((wire.WireVector.of((uid, orig, wire.WireCount(1))), conn_type, False))
    cases.append((wire.WireSet.of((uid,)), conn_type, False))

    agree(cases)


def test_containers():

    key = wire.WireVector.of((wire.WireAddress.of('10.0.0.1'), wire.WirePort(80, wire.TransportProto.TCP)))
    pair = descriptor.SetType(descriptor.ADDR, descriptor.PORT)
    counts = descriptor.VectorType(descriptor.COUNT)

    cases = list()
    cases.append((wire.WireSet.of((key,)), pair, True))
    cases.append((wire.WireSet.of((wire.WireAddress.of('10.0.0.1'),)), pair, False))
    cases.append((wire.WireSet.of((key,)), descriptor.TableType((descriptor.ADDR, descriptor.PORT), descriptor.COUNT), False))
    cases.append((wire.WireTable.of({key: wire.WireCount(1)}), pair, False))
    cases.append((wire.WireVector.of((wire.WireCount(1), wire.WireCount(2))), counts, True))
    cases.append((wire.WireVector.of((wire.WireCount(1), wire.WireNone())), counts, False))

    agree(cases)


def test_container_indices():

    # Sets and tables can themselves index sets and tables.

    inner = wire.WireSet.of((wire.WireCount(1), wire.WireCount(2)))
    table = wire.WireTable.of({wire.WireString('a'): wire.WireCount(1)})

    cases = list()
    cases.append((wire.WireSet.of((inner,)), descriptor.SetType(descriptor.SetType(descriptor.COUNT)), True))
    cases.append((wire.WireSet.of((inner,)), descriptor.SetType(descriptor.SetType(descriptor.STRING)), False))
    cases.append((wire.WireTable.of({table: wire.WireCount(1)}), descriptor.TableType(descriptor.TableType(descriptor.STRING, descriptor.COUNT), descriptor.COUNT), True))

    agree(cases)


def test_functions(env, closure):

    def snapshot(name, value):
        pair = wire.WireVector.of((wire.WireString(name), value))
        return wire.WireVector.of((wire.WireString(closure.name), wire.WireVector.of((pair,))))

    func = descriptor.FuncType()

    cases = list()
    cases.append((wire.WireVector.of((wire.WireString('double'),)), func, True))
    cases.append((wire.WireVector.of((wire.WireString('missing'),)), func, False))
    cases.append((wire.WireVector.of((wire.WireString('not_a_function'),)), func, False))
    cases.append((snapshot('count', wire.WireCount(3)), func, True))
    cases.append((snapshot('count', wire.WireNone()), func, True))
    cases.append((snapshot('count', wire.WireString('three')), func, False))
    cases.append((snapshot('other', wire.WireCount(3)), func, False))

    agree(cases, env)


def test_opaque():

    elements = wire.WireSet.of((wire.WireCount(1), wire.WireCount(2)))
    kind = wire.WireString(SetIterator.kind)
    type = descriptor.OpaqueType(SetIterator.kind)

    good = wire.WireVector.of((kind, wire.WireVector.of((elements, wire.WireCount(1)))))
    moved = wire.WireVector.of((kind, wire.WireVector.of((elements, wire.WireCount(3)))))
    malformed = wire.WireVector.of((kind, wire.WireNone()))
    unknown = wire.WireVector.of((wire.WireString('test::unknown'), wire.WireNone()))

    cases = list()
    cases.append((good, type, True))
    cases.append((moved, type, False))
    cases.append((malformed, type, False))
    cases.append((unknown, descriptor.OpaqueType(), False))

    # Opaque values index sets through an outer wrapper.

    cases.append((wire.WireSet.of((wire.WireVector.of((good,)),)), descriptor.SetType(type), True))
    cases.append((wire.WireSet.of((good,)), descriptor.SetType(type), False))

    agree(cases)


def test_nesting():

    type = descriptor.VectorType(descriptor.VectorType(descriptor.COUNT))
    data = wire.WireVector.of((wire.WireVector.of((wire.WireCount(1),)),))

    agree([(data, type, True)], netbridge.Environment(max_depth=3))
    agree([(data, type, False)], netbridge.Environment(max_depth=2))

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
