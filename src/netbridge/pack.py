""" Conversion from runtime values to wire values. A runtime value that has
    no wire representation, or that contains one, raises
    :class:`netbridge.errors.InvalidData`; nothing is partially converted.
"""

import logging

from . import config
from . import data
from . import environment
from . import errors
from . import keys
from . import opaque
from . import values
from . import wire
from .descriptor import TypeTag


logger = logging.getLogger(__name__)


def to_wire(value, env=None):
    """ Return the wire value representing the runtime *value*. Only the
        nesting limit of the :class:`netbridge.environment.Environment`
        *env* applies in this direction.
    """

    env = environment.resolve(env)
    return _pack(value, env, 0)


def _pack(value, env, depth):

    depth = env.descend(depth)

    try:
        packer = _packers[value.__class__]
    except KeyError:
        if isinstance(value, opaque.OpaqueValue):
            return opaque.pack(value)

        raise errors.UnsupportedKind('unsupported runtime value: %r' % (value,))

    return packer(value, env, depth)


def _pack_scalar(value, env, depth):

    tag = value.type.tag

    try:
        packer = _scalar_packers[tag]
    except KeyError:
        logger.error("unsupported runtime type for serialization: %s", tag.name)
        raise errors.UnsupportedKind('unsupported runtime type: %s' % (tag.name))

    try:
        return packer(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise errors.InvalidData('invalid %s value %r: %s' % (tag.name, value.value, e))


def _pack_enum(value):

    label = value.type.label(value.value)

    if label is None:
        label = config.UNKNOWN_ENUM

    return wire.WireEnum(label)


def _pack_port(value):
    port = value.value
    return wire.WirePort(port.number, wire.TransportProto(port.protocol))


_scalar_packers = {
    TypeTag.BOOL: lambda value: wire.WireBool(bool(value.value)),
    TypeTag.INT: lambda value: wire.WireInteger(value.value),
    TypeTag.COUNT: lambda value: wire.WireCount(value.value),
    TypeTag.COUNTER: lambda value: wire.WireCount(value.value),
    TypeTag.DOUBLE: lambda value: wire.WireReal(float(value.value)),
    TypeTag.TIME: lambda value: wire.WireTimestamp(wire.seconds_to_ns(value.value)),
    TypeTag.INTERVAL: lambda value: wire.WireTimespan(wire.seconds_to_ns(value.value)),
    TypeTag.STRING: lambda value: wire.WireString(value.value),
    TypeTag.FILE: lambda value: wire.WireString(value.value),
    TypeTag.ADDR: lambda value: wire.WireAddress.of(value.value),
    TypeTag.SUBNET: lambda value: wire.WireSubnet.of(value.value),
    TypeTag.PORT: _pack_port,
    TypeTag.ENUM: _pack_enum,
}


def _pack_table(value, env, depth):

    index_types = value.type.indices
    is_set = value.is_set()
    packed = dict()

    for index, item in value.items():
        parts = [_pack(part, env, depth) for part in index]
        key = keys.join(parts, index_types)

        if key in packed:
            raise errors.InvalidData('distinct indices share the wire key %r' % (key,))

        if is_set:
            packed[key] = None
        else:
            packed[key] = _pack(item, env, depth)

    if is_set:
        return wire.WireSet(frozenset(packed.keys()))

    return wire.WireTable(frozenset(packed.items()))


def _pack_vector(value, env, depth):

    elements = list()

    for index in range(value.size()):
        item = value.lookup(index)

        # Holes are skipped, not serialized.

        if item is None:
            continue

        elements.append(_pack(item, env, depth))

    return wire.WireVector(tuple(elements))


def _pack_record(value, env, depth):

    elements = list()

    for position in range(value.type.num_fields):
        item = value.lookup_with_default(position)

        if item is None:
            elements.append(wire.WireNone())
        else:
            elements.append(_pack(item, env, depth))

    return wire.WireVector(tuple(elements))


def _pack_func(value, env, depth):

    function = value.function
    elements = [wire.WireString(function.name)]

    if function.is_lambda():
        if function.capture_types is None:
            logger.warning("closure %s cannot capture variables", function.name)
            raise errors.InvalidData('closure %s cannot capture variables' % (function.name))

        if function.captures:
            elements.append(pack_captures(function, env, depth))

    return wire.WireVector(tuple(elements))


def pack_captures(function, env, depth):
    """ Return the wire snapshot of the captured values of *function*: a
        vector of (name, value) vectors, sorted by name.
    """

    pairs = list()

    for name in sorted(function.captures.keys()):
        captured = function.captures[name]

        try:
            packed = _pack(captured, env, depth)
        except errors.NestingTooDeep:
            raise
        except errors.InvalidData as e:
            raise errors.InvalidData('cannot serialize %s of %s: %s' % (name, function.name, e))

        pairs.append(wire.WireVector((wire.WireString(name), packed)))

    return wire.WireVector(tuple(pairs))


def _pack_pattern(value, env, depth):
    return wire.WireVector((wire.WireString(value.exact), wire.WireString(value.anywhere)))


def _pack_data(value, env, depth):
    return value.data


_packers = {
    values.Value: _pack_scalar,
    values.TableValue: _pack_table,
    values.VectorValue: _pack_vector,
    values.RecordValue: _pack_record,
    values.FuncValue: _pack_func,
    values.PatternValue: _pack_pattern,
    data.DataValue: _pack_data,
}


def make_data(value, env=None):
    """ Wrap the wire form of the runtime *value* in a
        :class:`netbridge.data.DataValue`.
    """

    return data.DataValue(to_wire(value, env))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
