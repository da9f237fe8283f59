""" Type descriptors: the nominal description of a runtime value's expected
    shape. A wire value is only ever interpreted relative to one of these.
"""

import enum


class TypeTag(enum.IntEnum):
    """ The kind of a runtime type. The integer values are part of the
        thread-safe field descriptor format and must not change.
    """

    VOID = 0
    BOOL = 1
    INT = 2
    COUNT = 3
    COUNTER = 4
    DOUBLE = 5
    TIME = 6
    INTERVAL = 7
    STRING = 8
    PATTERN = 9
    ENUM = 10
    PORT = 12
    ADDR = 13
    SUBNET = 14
    ANY = 15
    TABLE = 16
    RECORD = 18
    FUNC = 20
    FILE = 21
    VECTOR = 22
    OPAQUE = 23


class Type:
    """ A runtime type. Scalar types are plain :class:`Type` instances; the
        subclasses below add the structure needed by composite types.
    """

    def __init__(self, tag):
        self.tag = TypeTag(tag)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self._key() == other._key()


    def __hash__(self):
        return hash(self._key())


    def __repr__(self):
        return self.tag.name.lower()


    def _key(self):
        return (self.tag,)


    def is_set(self):
        return False


    def is_table(self):
        return False


# end of class Type



class EnumType(Type):
    """ An enumerated type. The *labels* are either a sequence of names, which
        are assigned ordinals in order, or a dictionary mapping each name to
        an explicit ordinal.
    """

    def __init__(self, name, labels):

        Type.__init__(self, TypeTag.ENUM)
        self.name = name

        try:
            labels = dict(labels.items())
        except AttributeError:
            labels = dict((label, ordinal) for ordinal, label in enumerate(labels))

        self._ordinals = labels
        self._labels = dict((ordinal, label) for label, ordinal in labels.items())


    def __repr__(self):
        return 'enum ' + self.name


    def _key(self):
        return (self.tag, self.name, tuple(sorted(self._ordinals.items())))


    def ordinal(self, label):
        """ Return the ordinal for *label*, or None if there is no such label.
        """

        return self._ordinals.get(label)


    def label(self, ordinal):
        """ Return the label for *ordinal*, or None if there is no such
            ordinal.
        """

        return self._labels.get(ordinal)


# end of class EnumType



class SetType(Type):
    """ A set, indexed by one or more component types. A set of a single
        record-shaped component is distinct from a set of several flat
        components; see :mod:`netbridge.keys`.
    """

    def __init__(self, *indices):

        if len(indices) == 0:
            raise ValueError('a set needs at least one index type')

        Type.__init__(self, TypeTag.TABLE)
        self.indices = tuple(indices)
        self.yield_type = None


    def __repr__(self):
        return 'set[%s]' % (', '.join(repr(index) for index in self.indices))


    def _key(self):
        return (self.tag, self.indices, self.yield_type)


    def is_set(self):
        return True


# end of class SetType



class TableType(SetType):
    """ A mapping from one or more index component types to a *yield_type*.
    """

    def __init__(self, indices, yield_type):

        if isinstance(indices, Type):
            indices = (indices,)

        SetType.__init__(self, *indices)
        self.yield_type = yield_type


    def __repr__(self):
        indices = ', '.join(repr(index) for index in self.indices)
        return 'table[%s] of %r' % (indices, self.yield_type)


    def is_set(self):
        return False


    def is_table(self):
        return True


# end of class TableType



class VectorType(Type):

    def __init__(self, yield_type):
        Type.__init__(self, TypeTag.VECTOR)
        self.yield_type = yield_type


    def __repr__(self):
        return 'vector of %r' % (self.yield_type,)


    def _key(self):
        return (self.tag, self.yield_type)


# end of class VectorType



class RecordField:
    """ One named field of a :class:`RecordType`. An *optional* field may be
        absent from a record value; a *default*, if any, is a runtime value
        used in place of an absent field when the record is serialized.
    """

    def __init__(self, name, type, optional=False, default=None):
        self.name = name
        self.type = type
        self.optional = optional
        self.default = default


    def __eq__(self, other):
        if not isinstance(other, RecordField):
            return NotImplemented

        return self._key() == other._key()


    def __hash__(self):
        return hash(self._key())


    def __repr__(self):
        suffix = ' &optional' if self.optional else ''
        return '%s: %r%s' % (self.name, self.type, suffix)


    def _key(self):
        return (self.name, self.type, self.optional)


# end of class RecordField



class RecordType(Type):

    def __init__(self, name, fields):

        Type.__init__(self, TypeTag.RECORD)
        self.name = name
        self.fields = tuple(fields)

        self._by_name = dict()
        for index, field in enumerate(self.fields):
            if field.name in self._by_name:
                raise ValueError('duplicate field in %s: %s' % (name, field.name))
            self._by_name[field.name] = index

        # A serialized record may stop early, but not before its last
        # mandatory field.

        self.min_length = 0
        for index, field in enumerate(self.fields):
            if not field.optional:
                self.min_length = index + 1


    def __repr__(self):
        return 'record ' + self.name


    def _key(self):
        return (self.tag, self.name, self.fields)


    @property
    def num_fields(self):
        return len(self.fields)


    def field_index(self, name):
        """ Return the position of the field called *name*.
        """

        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError('%s has no field %r' % (self.name, name))


# end of class RecordType



class FuncType(Type):

    def __init__(self, name=None):
        Type.__init__(self, TypeTag.FUNC)
        self.name = name


    def __repr__(self):
        if self.name is None:
            return 'function'

        return 'function ' + self.name


    def _key(self):
        return (self.tag, self.name)


# end of class FuncType



class OpaqueType(Type):
    """ A value whose representation is defined by an externally registered
        opaque kind. A *kind* of None accepts any registered kind.
    """

    def __init__(self, kind=None):
        Type.__init__(self, TypeTag.OPAQUE)
        self.kind = kind


    def __repr__(self):
        if self.kind is None:
            return 'opaque'

        return 'opaque of ' + self.kind


    def _key(self):
        return (self.tag, self.kind)


# end of class OpaqueType


# Shared instances of the types that carry no structure.

VOID = Type(TypeTag.VOID)
BOOL = Type(TypeTag.BOOL)
INT = Type(TypeTag.INT)
COUNT = Type(TypeTag.COUNT)
COUNTER = Type(TypeTag.COUNTER)
DOUBLE = Type(TypeTag.DOUBLE)
TIME = Type(TypeTag.TIME)
INTERVAL = Type(TypeTag.INTERVAL)
STRING = Type(TypeTag.STRING)
PATTERN = Type(TypeTag.PATTERN)
PORT = Type(TypeTag.PORT)
ADDR = Type(TypeTag.ADDR)
SUBNET = Type(TypeTag.SUBNET)
ANY = Type(TypeTag.ANY)
FILE = Type(TypeTag.FILE)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
