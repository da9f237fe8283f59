""" Conversion from wire values to runtime values. The traversal mirrors
    :mod:`netbridge.check`, allocating as it goes; the first structural
    mismatch raises a :class:`netbridge.errors.ConversionError` and the
    partially built value is discarded.
"""

import logging
import re

from . import data as data_module
from . import environment
from . import errors
from . import keys
from . import values
from . import wire
from .descriptor import TypeTag


logger = logging.getLogger(__name__)


def to_runtime(data, type, env=None):
    """ Return the runtime value of *type* represented by the wire value
        *data*. Callables are resolved, and opaque values reconstructed,
        against the :class:`netbridge.environment.Environment` *env*.

        An ANY *type* defers interpretation: the result is a
        :class:`netbridge.data.DataValue` wrapping *data* unchanged.
    """

    env = environment.resolve(env)
    return _unpack(data, type, env, 0)


def _unpack(data, type, env, depth):

    if type.tag == TypeTag.ANY:
        return data_module.DataValue(data)

    depth = env.descend(depth)
    unpacker = _unpackers[data.__class__]
    return unpacker(data, type, env, depth)


def _mismatch(data, type):
    name = data.__class__.__name__
    return errors.ShapeMismatch('cannot convert %s to %r' % (name, type))


def _unpack_none(data, type, env, depth):
    raise _mismatch(data, type)


def _unpack_bool(data, type, env, depth):

    if type.tag != TypeTag.BOOL:
        raise _mismatch(data, type)

    return values.Value(type, data.value)


def _unpack_count(data, type, env, depth):

    if type.tag != TypeTag.COUNT and type.tag != TypeTag.COUNTER:
        raise _mismatch(data, type)

    return values.Value(type, data.value)


def _unpack_integer(data, type, env, depth):

    if type.tag != TypeTag.INT:
        raise _mismatch(data, type)

    return values.Value(type, data.value)


def _unpack_real(data, type, env, depth):

    if type.tag != TypeTag.DOUBLE:
        raise _mismatch(data, type)

    return values.Value(type, data.value)


def _unpack_string(data, type, env, depth):

    if type.tag == TypeTag.STRING or type.tag == TypeTag.FILE:
        return values.Value(type, data.value)

    raise _mismatch(data, type)


def _unpack_address(data, type, env, depth):

    if type.tag != TypeTag.ADDR:
        raise _mismatch(data, type)

    return values.Value(type, data.to_ip())


def _unpack_subnet(data, type, env, depth):

    if type.tag != TypeTag.SUBNET:
        raise _mismatch(data, type)

    return values.Value(type, data.to_network())


def _unpack_port(data, type, env, depth):

    if type.tag != TypeTag.PORT:
        raise _mismatch(data, type)

    return values.Value(type, values.Port(data.number, data.protocol))


def _unpack_timestamp(data, type, env, depth):

    if type.tag != TypeTag.TIME:
        raise _mismatch(data, type)

    return values.Value(type, wire.ns_to_seconds(data.ns))


def _unpack_timespan(data, type, env, depth):

    if type.tag != TypeTag.INTERVAL:
        raise _mismatch(data, type)

    return values.Value(type, wire.ns_to_seconds(data.ns))


def _unpack_enum(data, type, env, depth):

    if type.tag != TypeTag.ENUM:
        raise _mismatch(data, type)

    ordinal = type.ordinal(data.name)

    if ordinal is None:
        raise errors.ShapeMismatch('%r has no label %r' % (type, data.name))

    return values.Value(type, ordinal)


def _unpack_key(key, index_types, env, depth):

    parts = keys.components(key, index_types)

    if len(parts) != len(index_types):
        raise errors.ShapeMismatch('key has %d components, expected %d' % (len(parts), len(index_types)))

    index = list()

    for part, index_type in zip(parts, index_types):
        index.append(_unpack(part, index_type, env, depth))

    return tuple(index)


def _unpack_set(data, type, env, depth):

    if type.tag != TypeTag.TABLE or not type.is_set():
        raise _mismatch(data, type)

    rval = values.TableValue(type)

    for element in data.elements:
        index = _unpack_key(element, type.indices, env, depth)
        rval.assign(index)

    return rval


def _unpack_table(data, type, env, depth):

    if type.tag != TypeTag.TABLE or not type.is_table():
        raise _mismatch(data, type)

    rval = values.TableValue(type)

    for key, value in data.entries:
        index = _unpack_key(key, type.indices, env, depth)
        value = _unpack(value, type.yield_type, env, depth)
        rval.assign(index, value)

    return rval


def _unpack_vector(data, type, env, depth):

    try:
        unpacker = _vector_unpackers[type.tag]
    except KeyError:
        raise _mismatch(data, type)

    return unpacker(data, type, env, depth)


def _unpack_vector_of(data, type, env, depth):

    rval = values.VectorValue(type)

    for element in data.elements:
        rval.append(_unpack(element, type.yield_type, env, depth))

    return rval


def _unpack_record(data, type, env, depth):

    elements = data.elements

    if len(elements) < type.min_length:
        raise errors.ShapeMismatch('%r needs at least %d fields, got %d' % (type, type.min_length, len(elements)))

    rval = values.RecordValue(type)

    for position, (field, element) in enumerate(zip(type.fields, elements)):

        # A none element is an absent field; it is not converted.

        if isinstance(element, wire.WireNone):
            if field.optional:
                continue
            raise errors.ShapeMismatch('%r field %s is not optional' % (type, field.name))

        rval.assign(position, _unpack(element, field.type, env, depth))

    return rval


def _unpack_func(data, type, env, depth):

    elements = data.elements

    if len(elements) < 1 or len(elements) > 2:
        raise errors.ShapeMismatch('functions are one or two element vectors')

    name = elements[0]

    if not isinstance(name, wire.WireString):
        raise errors.ShapeMismatch('function name must be a string')

    name = name.value
    rval = env.scope.lookup(name)

    if rval is None:
        raise errors.ResolutionError('no such function: ' + name)

    if not isinstance(rval, values.FuncValue):
        raise errors.ResolutionError('not a function: ' + name)

    if len(elements) == 2:
        function = rval.function
        captures = unpack_captures(function, elements[1], env, depth)
        function.update_captures(captures)

    # The result is the existing function, not a copy of it.

    return rval


def unpack_captures(function, snapshot, env, depth):
    """ Convert the wire *snapshot* of captured values for *function* to a
        dictionary suitable for :func:`netbridge.scope.Function.update_captures`.
        This is the inverse of :func:`netbridge.pack.pack_captures`.
    """

    if function.capture_types is None:
        raise errors.ResolutionError('function %s does not capture variables' % (function.name))

    if not isinstance(snapshot, wire.WireVector):
        raise errors.ResolutionError('captured values for %s must be a vector' % (function.name))

    captures = dict()

    for pair in snapshot.elements:
        if not isinstance(pair, wire.WireVector) or len(pair) != 2:
            raise errors.ResolutionError('captured values must be (name, value) pairs')

        name, value = pair.elements

        if not isinstance(name, wire.WireString):
            raise errors.ResolutionError('captured variable names must be strings')

        name = name.value

        try:
            capture_type = function.capture_types[name]
        except KeyError:
            raise errors.ResolutionError('function %s does not capture %r' % (function.name, name))

        if isinstance(value, wire.WireNone):
            captures[name] = None
            continue

        try:
            captures[name] = _unpack(value, capture_type, env, depth)
        except errors.NestingTooDeep:
            raise
        except errors.ConversionError as e:
            raise errors.ResolutionError('cannot restore %s of %s: %s' % (name, function.name, e))

    return captures


def _unpack_pattern(data, type, env, depth):

    if len(data) != 2:
        raise errors.ShapeMismatch('patterns are two element vectors')

    exact, anywhere = data.elements

    if not isinstance(exact, wire.WireString) or not isinstance(anywhere, wire.WireString):
        raise errors.ShapeMismatch('pattern text must be strings')

    try:
        return values.PatternValue(exact.value, anywhere.value)
    except re.error as e:
        logger.error("failed compiling unserialized pattern: %s, %s: %s", exact.value, anywhere.value, e)
        raise errors.ShapeMismatch('invalid pattern: %s' % (e))


def _unpack_opaque(data, type, env, depth):
    return env.registry.unpack(data, type.kind)


_unpackers = wire.exhaustive({
    wire.WireNone: _unpack_none,
    wire.WireBool: _unpack_bool,
    wire.WireCount: _unpack_count,
    wire.WireInteger: _unpack_integer,
    wire.WireReal: _unpack_real,
    wire.WireString: _unpack_string,
    wire.WireAddress: _unpack_address,
    wire.WireSubnet: _unpack_subnet,
    wire.WirePort: _unpack_port,
    wire.WireTimestamp: _unpack_timestamp,
    wire.WireTimespan: _unpack_timespan,
    wire.WireEnum: _unpack_enum,
    wire.WireSet: _unpack_set,
    wire.WireTable: _unpack_table,
    wire.WireVector: _unpack_vector,
}, 'unpack')


_vector_unpackers = {
    TypeTag.VECTOR: _unpack_vector_of,
    TypeTag.RECORD: _unpack_record,
    TypeTag.FUNC: _unpack_func,
    TypeTag.PATTERN: _unpack_pattern,
    TypeTag.OPAQUE: _unpack_opaque,
}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
