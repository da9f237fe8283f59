""" Runtime values: the platform's live, typed values. Each value carries the
    :mod:`netbridge.descriptor` type it was built for. Values compare
    structurally, which is what a round trip through the wire format is
    expected to preserve.

    Scalars are plain :class:`Value` instances holding a Python-native
    payload:

    ========  ==============================================
    BOOL      bool
    INT       int
    COUNT     int (also COUNTER)
    DOUBLE    float (also TIME, in epoch seconds, and INTERVAL, in seconds)
    STRING    str
    ADDR      :class:`ipaddress.IPv4Address` or :class:`ipaddress.IPv6Address`
    SUBNET    :class:`ipaddress.IPv4Network` or :class:`ipaddress.IPv6Network`
    PORT      :class:`Port`
    ENUM      int ordinal
    FILE      str file name
    ========  ==============================================
"""

import collections
import ipaddress
import re

from . import descriptor
from .descriptor import TypeTag
from .wire import TransportProto


class Port(collections.namedtuple('Port', ('number', 'protocol'))):

    __slots__ = ()

    def __str__(self):
        return '%d/%s' % (self.number, self.protocol)


class Value:
    """ A scalar runtime value.
    """

    def __init__(self, type, value):
        self.type = type
        self.value = value


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.type == other.type and self.value == other.value


    def __hash__(self):
        return hash((self.type, self.value))


    def __repr__(self):
        return '%r(%r)' % (self.type, self.value)


# end of class Value



class TableValue:
    """ A set or table. Entries are keyed by a tuple of index values, one per
        index type; sets map every index to None.
    """

    def __init__(self, type):

        if type.tag != TypeTag.TABLE:
            raise TypeError('not a set or table type: %r' % (type,))

        self.type = type
        self._entries = dict()


    def __contains__(self, index):
        return self._index(index) in self._entries


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.type == other.type and self._entries == other._entries


    # Sets and tables may themselves index sets and tables; the same caveat
    # as for vectors applies.

    def __hash__(self):
        return hash((self.type, frozenset(self._entries.items())))


    def __iter__(self):
        return iter(self._entries)


    def __len__(self):
        return len(self._entries)


    def __repr__(self):
        return '%r%r' % (self.type, self._entries)


    def _index(self, index):

        if not isinstance(index, tuple):
            index = (index,)

        if len(index) != len(self.type.indices):
            raise ValueError('%r expects %d index values, not %d' % (self.type, len(self.type.indices), len(index)))

        return index


    def assign(self, index, value=None):
        """ Add *index* to the set or table; *index* is a tuple of index
            values, or a single value for single-index types. Tables require
            a *value*, sets forbid one.
        """

        index = self._index(index)

        if self.type.is_set():
            if value is not None:
                raise ValueError('sets do not hold values')
        elif value is None:
            raise ValueError('tables require a value')

        self._entries[index] = value


    def is_set(self):
        return self.type.is_set()


    def items(self):
        return self._entries.items()


    def lookup(self, index):
        return self._entries.get(self._index(index))


    def remove(self, index):
        del self._entries[self._index(index)]


# end of class TableValue



class VectorValue:
    """ A growable, ordered sequence. Assigning past the end leaves holes,
        which read back as None.
    """

    def __init__(self, type, items=()):

        if type.tag != TypeTag.VECTOR:
            raise TypeError('not a vector type: %r' % (type,))

        self.type = type
        self._items = list(items)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.type == other.type and self._items == other._items


    # Vectors may index sets and tables. As with any Python key, a vector
    # must not be modified while it is in use as one.

    def __hash__(self):
        return hash((self.type, tuple(self._items)))


    def __len__(self):
        return len(self._items)


    def __repr__(self):
        return '%r%r' % (self.type, self._items)


    def append(self, value):
        self._items.append(value)


    def assign(self, index, value):

        if index < 0:
            raise IndexError('negative vector index: %d' % (index))

        missing = index + 1 - len(self._items)
        if missing > 0:
            self._items.extend([None] * missing)

        self._items[index] = value


    def lookup(self, index):
        """ Return the value at *index*, or None for a hole or an index past
            the end of the vector.
        """

        if index < 0 or index >= len(self._items):
            return None

        return self._items[index]


    def size(self):
        return len(self._items)


# end of class VectorValue



class RecordValue:
    """ A record: a fixed-size array of optional field values.
    """

    def __init__(self, type, **fields):

        if type.tag != TypeTag.RECORD:
            raise TypeError('not a record type: %r' % (type,))

        self.type = type
        self._fields = [None] * type.num_fields

        for name, value in fields.items():
            self.assign(name, value)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.type == other.type and self._fields == other._fields


    def __hash__(self):
        return hash((self.type, tuple(self._fields)))


    def __getitem__(self, name):
        return self._fields[self.type.field_index(name)]


    def __repr__(self):
        fields = list()
        for field, value in zip(self.type.fields, self._fields):
            fields.append('%s=%r' % (field.name, value))

        return '%s(%s)' % (self.type.name, ', '.join(fields))


    def _position(self, field):
        if isinstance(field, str):
            return self.type.field_index(field)

        return field


    def assign(self, field, value):
        """ Set the *field*, identified by name or position, to *value*. A
            value of None marks the field absent.
        """

        self._fields[self._position(field)] = value


    def lookup(self, field):
        return self._fields[self._position(field)]


    def lookup_with_default(self, field):
        """ As :func:`lookup`, but an absent field yields the field's default
            value, if it declares one.
        """

        position = self._position(field)
        value = self._fields[position]

        if value is None:
            value = self.type.fields[position].default

        return value


# end of class RecordValue



class FuncValue:
    """ A reference to a callable entity (a :class:`netbridge.scope.Function`).
        Two references are equal only if they refer to the same entity.
    """

    def __init__(self, function, type=None):

        if type is None:
            type = descriptor.FuncType(function.name)

        self.type = type
        self.function = function


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.function is other.function


    def __hash__(self):
        return id(self.function)


    def __repr__(self):
        return 'function ' + self.function.name


# end of class FuncValue



class PatternValue:
    """ A compiled pattern. The *exact* text is matched against an entire
        string, the *anywhere* text is searched for within a string; if the
        latter is not provided it is the same as the former.

        Raises :class:`re.error` if either text does not compile.
    """

    def __init__(self, exact, anywhere=None):

        if anywhere is None:
            anywhere = exact

        self.type = descriptor.PATTERN
        self.exact = exact
        self.anywhere = anywhere

        self._exact = re.compile(exact)
        self._anywhere = re.compile(anywhere)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.exact == other.exact and self.anywhere == other.anywhere


    def __hash__(self):
        return hash((self.exact, self.anywhere))


    def __repr__(self):
        return '/%s/' % (self.exact)


    def match_exactly(self, text):
        return self._exact.fullmatch(text) is not None


    def match_anywhere(self, text):
        return self._anywhere.search(text) is not None


# end of class PatternValue


# Constructors for scalar values.

def make_bool(value):
    return Value(descriptor.BOOL, bool(value))

def make_int(value):
    return Value(descriptor.INT, int(value))

def make_count(value):
    return Value(descriptor.COUNT, int(value))

def make_counter(value):
    return Value(descriptor.COUNTER, int(value))

def make_double(value):
    return Value(descriptor.DOUBLE, float(value))

def make_time(seconds):
    return Value(descriptor.TIME, float(seconds))

def make_interval(seconds):
    return Value(descriptor.INTERVAL, float(seconds))

def make_string(value):
    return Value(descriptor.STRING, str(value))

def make_file(name):
    return Value(descriptor.FILE, str(name))

def make_addr(address):
    return Value(descriptor.ADDR, ipaddress.ip_address(address))

def make_subnet(network):
    return Value(descriptor.SUBNET, ipaddress.ip_network(network, strict=False))


def make_port(number, protocol=TransportProto.UNKNOWN):
    """ Return a port value. The *protocol* may be a
        :class:`netbridge.wire.TransportProto` or its lowercase name.
    """

    if isinstance(protocol, str):
        protocol = TransportProto[protocol.upper()]

    return Value(descriptor.PORT, Port(int(number), TransportProto(protocol)))


def make_enum(type, label):
    """ Return the value of the enum *type* labeled *label*.
    """

    ordinal = type.ordinal(label)

    if ordinal is None:
        raise ValueError('%r has no label %r' % (type, label))

    return Value(type, ordinal)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
