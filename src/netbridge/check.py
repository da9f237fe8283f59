""" The type checker: decide whether a wire value can be converted to a given
    runtime type, without constructing anything. :func:`check` returns True
    exactly when :func:`netbridge.unpack.to_runtime` would succeed for the
    same arguments.
"""

import logging
import re

from . import environment
from . import errors
from . import keys
from . import values
from . import wire
from .descriptor import TypeTag


logger = logging.getLogger(__name__)


def check(data, type, env=None):
    """ Return True if the wire value *data* matches the runtime *type*.
        Callables are resolved, and opaque values probed, against the
        :class:`netbridge.environment.Environment` *env*.
    """

    env = environment.resolve(env)

    try:
        return _check(data, type, env, 0)
    except errors.NestingTooDeep:
        return False


def _check(data, type, env, depth):

    if type.tag == TypeTag.ANY:
        return True

    depth = env.descend(depth)
    checker = _checkers[data.__class__]
    return checker(data, type, env, depth)


def _check_none(data, type, env, depth):
    return False


def _check_bool(data, type, env, depth):
    return type.tag == TypeTag.BOOL


def _check_count(data, type, env, depth):
    return type.tag == TypeTag.COUNT or type.tag == TypeTag.COUNTER


def _check_integer(data, type, env, depth):
    return type.tag == TypeTag.INT


def _check_real(data, type, env, depth):
    return type.tag == TypeTag.DOUBLE


def _check_string(data, type, env, depth):
    return type.tag == TypeTag.STRING or type.tag == TypeTag.FILE


def _check_address(data, type, env, depth):
    return type.tag == TypeTag.ADDR


def _check_subnet(data, type, env, depth):
    return type.tag == TypeTag.SUBNET


def _check_port(data, type, env, depth):
    return type.tag == TypeTag.PORT


def _check_timestamp(data, type, env, depth):
    return type.tag == TypeTag.TIME


def _check_timespan(data, type, env, depth):
    return type.tag == TypeTag.INTERVAL


def _check_enum(data, type, env, depth):

    if type.tag != TypeTag.ENUM:
        return False

    return type.ordinal(data.name) is not None


def _check_key(key, index_types, env, depth):

    parts = keys.components(key, index_types)

    if len(parts) != len(index_types):
        return False

    for part, index_type in zip(parts, index_types):
        if not _check(part, index_type, env, depth):
            return False

    return True


def _check_set(data, type, env, depth):

    if type.tag != TypeTag.TABLE or not type.is_set():
        return False

    for element in data.elements:
        if not _check_key(element, type.indices, env, depth):
            return False

    return True


def _check_table(data, type, env, depth):

    if type.tag != TypeTag.TABLE or not type.is_table():
        return False

    for key, value in data.entries:
        if not _check_key(key, type.indices, env, depth):
            return False

        if not _check(value, type.yield_type, env, depth):
            return False

    return True


def _check_vector(data, type, env, depth):

    try:
        checker = _vector_checkers[type.tag]
    except KeyError:
        return False

    return checker(data, type, env, depth)


def _check_vector_of(data, type, env, depth):

    for element in data.elements:
        if not _check(element, type.yield_type, env, depth):
            return False

    return True


def _check_record(data, type, env, depth):

    elements = data.elements

    if len(elements) < type.min_length:
        return False

    for field, element in zip(type.fields, elements):
        if isinstance(element, wire.WireNone):
            if field.optional:
                continue
            return False

        if not _check(element, field.type, env, depth):
            return False

    return True


def _check_func(data, type, env, depth):

    elements = data.elements

    if len(elements) < 1 or len(elements) > 2:
        return False

    name = elements[0]

    if not isinstance(name, wire.WireString):
        return False

    value = env.scope.lookup(name.value)

    if not isinstance(value, values.FuncValue):
        return False

    if len(elements) == 2:
        return check_captures(value.function, elements[1], env, depth)

    return True


def check_captures(function, snapshot, env, depth):
    """ Return True if the wire *snapshot* is a valid set of captured values
        for *function*. The snapshot is a vector of (name, value) vectors; a
        value of none clears the captured variable.
    """

    if function.capture_types is None:
        return False

    if not isinstance(snapshot, wire.WireVector):
        return False

    for pair in snapshot.elements:
        if not isinstance(pair, wire.WireVector) or len(pair) != 2:
            return False

        name, value = pair.elements

        if not isinstance(name, wire.WireString):
            return False

        try:
            capture_type = function.capture_types[name.value]
        except KeyError:
            return False

        if isinstance(value, wire.WireNone):
            continue

        if not _check(value, capture_type, env, depth):
            return False

    return True


def _check_pattern(data, type, env, depth):

    if len(data) != 2:
        return False

    exact, anywhere = data.elements

    if not isinstance(exact, wire.WireString) or not isinstance(anywhere, wire.WireString):
        return False

    try:
        re.compile(exact.value)
        re.compile(anywhere.value)
    except re.error as e:
        logger.error("failed compiling pattern: %s, %s: %s", exact.value, anywhere.value, e)
        return False

    return True


def _check_opaque(data, type, env, depth):

    # There is no way to validate an opaque value short of deserializing it.

    try:
        env.registry.unpack(data, type.kind)
    except errors.ConversionError:
        return False

    return True


_checkers = wire.exhaustive({
    wire.WireNone: _check_none,
    wire.WireBool: _check_bool,
    wire.WireCount: _check_count,
    wire.WireInteger: _check_integer,
    wire.WireReal: _check_real,
    wire.WireString: _check_string,
    wire.WireAddress: _check_address,
    wire.WireSubnet: _check_subnet,
    wire.WirePort: _check_port,
    wire.WireTimestamp: _check_timestamp,
    wire.WireTimespan: _check_timespan,
    wire.WireEnum: _check_enum,
    wire.WireSet: _check_set,
    wire.WireTable: _check_table,
    wire.WireVector: _check_vector,
}, 'check')


_vector_checkers = {
    TypeTag.VECTOR: _check_vector_of,
    TypeTag.RECORD: _check_record,
    TypeTag.FUNC: _check_func,
    TypeTag.PATTERN: _check_pattern,
    TypeTag.OPAQUE: _check_opaque,
}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
