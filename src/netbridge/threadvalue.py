""" The thread value bridge: conversion between wire values and the flat,
    self-contained values handed across threads to logging and event
    pipelines. Thread values share nothing with the runtime value system and
    carry their own type tag.

    Thread containers are homogeneous, wire containers are not. When a set or
    vector is converted, the first element decides the subtype of the whole
    container; any later element of a different type is replaced by a
    not-present placeholder of that subtype and an error is logged, so the
    container keeps its length. Tables cannot be represented at all.

    The length is not preserved on the way back for sets. Every placeholder
    becomes :class:`netbridge.wire.WireNone`, so several placeholders in one
    thread set collapse into a single wire set member.
"""

import logging

from . import config
from . import errors
from . import values
from . import wire
from .descriptor import TypeTag


logger = logging.getLogger(__name__)


class ThreadValue:
    """ A single value of type *type*, a :class:`TypeTag`. A value that is
        not *present* is a placeholder, and its *value* is meaningless.
        Containers (TABLE for sets, VECTOR) hold a list of
        :class:`ThreadValue` elements, all of type *subtype*.
    """

    def __init__(self, type, present=True, value=None, subtype=TypeTag.VOID):

        self.type = TypeTag(type)
        self.present = present
        self.value = value
        self.subtype = TypeTag(subtype)


    def __eq__(self, other):
        if not isinstance(other, ThreadValue):
            return NotImplemented

        if self.type != other.type or self.present != other.present:
            return False

        if self.subtype != other.subtype:
            return False

        if not self.present:
            return True

        return self.value == other.value


    __hash__ = None


    def __repr__(self):
        if not self.present:
            return 'ThreadValue(%s, not present)' % (self.type.name)

        if self.type == TypeTag.TABLE or self.type == TypeTag.VECTOR:
            return 'ThreadValue(%s of %s, %r)' % (self.type.name, self.subtype.name, self.value)

        return 'ThreadValue(%s, %r)' % (self.type.name, self.value)


# end of class ThreadValue



class ThreadField:
    """ One column of a logging or event schema.
    """

    def __init__(self, name, secondary_name=None, type=TypeTag.VOID, subtype=TypeTag.VOID, optional=False):

        self.name = name
        self.secondary_name = secondary_name
        self.type = TypeTag(type)
        self.subtype = TypeTag(subtype)
        self.optional = optional


    def __eq__(self, other):
        if not isinstance(other, ThreadField):
            return NotImplemented

        return self._key() == other._key()


    def __hash__(self):
        return hash(self._key())


    def __repr__(self):
        return 'ThreadField(%r, %s)' % (self.name, self.type.name)


    def _key(self):
        return (self.name, self.secondary_name, self.type, self.subtype, self.optional)


# end of class ThreadField



def to_thread_value(data, max_depth=None):
    """ Return the :class:`ThreadValue` for the wire value *data*. Raises
        :class:`netbridge.errors.TypeClash` if *data* is, or contains, a
        table, and :class:`netbridge.errors.NestingTooDeep` if it is nested
        deeper than *max_depth* levels (default
        :data:`netbridge.config.max_depth`).
    """

    if max_depth is None:
        max_depth = config.max_depth
    elif max_depth < 1 or max_depth > config.MAX_DEPTH_CEILING:
        raise ValueError('max_depth must be between 1 and %d, not %d' % (config.MAX_DEPTH_CEILING, max_depth))

    return _convert(data, max_depth, 0)


def _convert(data, limit, depth):

    depth += 1

    if depth > limit:
        raise errors.NestingTooDeep('value nested deeper than %d levels' % (limit))

    converter = _converters[data.__class__]
    return converter(data, limit, depth)


def _scalar(tag, extract):

    def converter(data, limit, depth):
        return ThreadValue(tag, value=extract(data))

    return converter


def _to_void(data, limit, depth):
    return ThreadValue(TypeTag.VOID)


def _to_table(data, limit, depth):
    logger.error("cannot convert a table to a thread value")
    raise errors.TypeClash('tables have no thread value representation')


def _homogeneous(tag, elements, limit, depth):

    if len(elements) == 0:
        # Nothing to go by.
        return ThreadValue(tag, subtype=TypeTag.VOID, value=list())

    converted = list()
    subtype = None

    for element in elements:
        item = _convert(element, limit, depth)

        if subtype is None:
            subtype = item.type
        elif item.type != subtype:
            logger.error("cannot convert heterogeneous %s: expected %s, got %s", tag.name, subtype.name, item.type.name)
            item = ThreadValue(subtype, present=False)

        converted.append(item)

    return ThreadValue(tag, subtype=subtype, value=converted)


def _to_set(data, limit, depth):
    return _homogeneous(TypeTag.TABLE, sorted(data.elements, key=_ordering), limit, depth)


def _to_vector(data, limit, depth):
    return _homogeneous(TypeTag.VECTOR, data.elements, limit, depth)


def _ordering(element):

    # Sets have no order of their own; this one is stable across processes.

    return (element.__class__.__name__, repr(element))


_converters = wire.exhaustive({
    wire.WireNone: _to_void,
    wire.WireBool: _scalar(TypeTag.BOOL, lambda data: data.value),
    wire.WireCount: _scalar(TypeTag.COUNT, lambda data: data.value),
    wire.WireInteger: _scalar(TypeTag.INT, lambda data: data.value),
    wire.WireReal: _scalar(TypeTag.DOUBLE, lambda data: data.value),
    wire.WireString: _scalar(TypeTag.STRING, lambda data: data.value),
    wire.WireAddress: _scalar(TypeTag.ADDR, lambda data: data.to_ip()),
    wire.WireSubnet: _scalar(TypeTag.SUBNET, lambda data: data.to_network()),
    wire.WirePort: _scalar(TypeTag.PORT, lambda data: values.Port(data.number, data.protocol)),
    wire.WireTimestamp: _scalar(TypeTag.TIME, lambda data: wire.ns_to_seconds(data.ns)),
    wire.WireTimespan: _scalar(TypeTag.INTERVAL, lambda data: wire.ns_to_seconds(data.ns)),
    wire.WireEnum: _scalar(TypeTag.ENUM, lambda data: data.name),
    wire.WireSet: _to_set,
    wire.WireTable: _to_table,
    wire.WireVector: _to_vector,
}, 'threadvalue')


def from_thread_value(value):
    """ Return the wire value for the :class:`ThreadValue` *value*. A value
        that is not present becomes :class:`netbridge.wire.WireNone`. Raises
        :class:`netbridge.errors.TypeClash` for types with no wire form.
    """

    if not value.present:
        return wire.WireNone()

    try:
        converter = _reverse_converters[value.type]
    except KeyError:
        raise errors.TypeClash('no wire representation for thread value type %s' % (value.type.name))

    try:
        return converter(value.value)
    except (ValueError, TypeError, OverflowError) as e:
        raise errors.TypeClash('invalid %s thread value %r: %s' % (value.type.name, value.value, e))


def _from_port(port):
    return wire.WirePort(port.number, wire.TransportProto(port.protocol))


def _from_set(elements):
    return wire.WireSet(frozenset(from_thread_value(element) for element in elements))


def _from_vector(elements):
    return wire.WireVector(tuple(from_thread_value(element) for element in elements))


_reverse_converters = {
    TypeTag.VOID: lambda value: wire.WireNone(),
    TypeTag.BOOL: lambda value: wire.WireBool(bool(value)),
    TypeTag.INT: wire.WireInteger,
    TypeTag.COUNT: wire.WireCount,
    TypeTag.COUNTER: wire.WireCount,
    TypeTag.DOUBLE: lambda value: wire.WireReal(float(value)),
    TypeTag.STRING: wire.WireString,
    TypeTag.ADDR: wire.WireAddress.of,
    TypeTag.SUBNET: wire.WireSubnet.of,
    TypeTag.PORT: _from_port,
    TypeTag.TIME: lambda value: wire.WireTimestamp(wire.seconds_to_ns(value)),
    TypeTag.INTERVAL: lambda value: wire.WireTimespan(wire.seconds_to_ns(value)),
    TypeTag.ENUM: wire.WireEnum,
    TypeTag.TABLE: _from_set,
    TypeTag.VECTOR: _from_vector,
}


def field_to_wire(field):
    """ Return the wire form of the :class:`ThreadField` *field*: a vector of
        name, secondary name or none, type, subtype, and the optional flag.
    """

    if field.secondary_name is None:
        secondary = wire.WireNone()
    else:
        secondary = wire.WireString(field.secondary_name)

    return wire.WireVector((
        wire.WireString(field.name),
        secondary,
        wire.WireCount(int(field.type)),
        wire.WireCount(int(field.subtype)),
        wire.WireBool(field.optional)))


def field_from_wire(data):
    """ Return the :class:`ThreadField` described by the wire value *data*,
        the inverse of :func:`field_to_wire`. Raises
        :class:`netbridge.errors.TypeClash` if *data* is malformed in any way.
    """

    if not isinstance(data, wire.WireVector) or len(data) != 5:
        raise errors.TypeClash('field descriptors are five element vectors')

    name, secondary, type, subtype, optional = data.elements

    if not isinstance(name, wire.WireString):
        raise errors.TypeClash('field name must be a string')

    if not isinstance(type, wire.WireCount) or not isinstance(subtype, wire.WireCount):
        raise errors.TypeClash('field type and subtype must be counts')

    if not isinstance(optional, wire.WireBool):
        raise errors.TypeClash('field optional flag must be a boolean')

    if isinstance(secondary, wire.WireNone):
        secondary = None
    elif isinstance(secondary, wire.WireString):
        secondary = secondary.value
    else:
        raise errors.TypeClash('field secondary name must be a string or none')

    try:
        type = TypeTag(type.value)
        subtype = TypeTag(subtype.value)
    except ValueError as e:
        raise errors.TypeClash('invalid field type: %s' % (e))

    return ThreadField(name.value, secondary, type, subtype, optional.value)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
