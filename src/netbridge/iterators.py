""" Iterator capsules: a traversal over a wire container that can be
    serialized mid-flight and resumed later, possibly after the container
    itself has been rebuilt from its wire form. Capsules are opaque values,
    so they travel through :mod:`netbridge.pack` and :mod:`netbridge.unpack`
    like any other runtime value.

    There is no separate exhausted state. :func:`at_end` is the comparison
    against the end of the container, and it is the caller's job to make it.

    Sets and tables make no promise that a rebuilt container lists its
    elements in the same order, so their capsules remember the *key*
    they point to and relocate by looking it up; if the key is gone the
    capsule cannot be resumed. Vectors and records preserve order, and their
    capsules remember an integer offset.

    The offset of a resumed vector or record capsule is not validated. An
    offset past the end of the container is only detected by :func:`at_end`,
    and :func:`current` at such a position raises :class:`IndexError`, as it
    does at a negative offset; honoring the container bounds is a contract
    on the caller.
"""

from . import errors
from . import opaque
from . import wire


class _Capsule(opaque.OpaqueValue):
    """ Behavior shared by every capsule. Subclasses define the container
        variant they traverse and how the position is stored.
    """

    container = None

    def __init__(self, data=None):

        self.data = None
        self.position = 0

        if data is not None:
            self.bind(data)


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.data == other.data and self.position == other.position


    def __hash__(self):
        return hash((self.data, self.position))


    def __repr__(self):
        return '%s(%r @ %r)' % (self.__class__.__name__, self.data, self.position)


    def bind(self, data):
        """ Point this capsule at the start of the wire container *data*.
            Wire values are immutable, so the capsule's snapshot cannot be
            affected by anything done to the container afterwards.
        """

        if not isinstance(data, self.container):
            raise errors.CapsuleError('%s iterates over %s, not %s' % (self.__class__.__name__, self.container.__name__, data.__class__.__name__))

        self._bind(data)
        self.position = 0


    def _bind(self, data):
        self.data = data


    def _require_bound(self):
        if self.data is None:
            raise errors.CapsuleError('%s is not bound to a container' % (self.__class__.__name__))


    def advance(self, count=1):
        """ Move forward by *count* elements. Returns False if that reaches
            the end of the container.
        """

        self._require_bound()
        self.position += count
        return not self.at_end()


    def at_end(self):
        self._require_bound()
        return self.position >= self._size()


    def _size(self):
        return len(self.data)


# end of class _Capsule



class _KeyCapsule(_Capsule):
    """ A capsule whose position marker is the key of the current element.
    """

    def _bind(self, data):
        self.data = data
        self._order = tuple(self._keys(data))


    def _keys(self, data):
        raise NotImplementedError()


    def current_key(self):
        self._require_bound()

        if self.at_end():
            raise errors.CapsuleError('%s is at the end of its container' % (self.__class__.__name__))

        return self._order[self.position]


    def serialize(self):

        # Past the end there is no key to remember.

        if self.data is None or self.at_end():
            return None

        return wire.WireVector((self.data, self.current_key()))


    def deserialize(self, data):

        if not isinstance(data, wire.WireVector) or len(data) != 2:
            return False

        container, key = data.elements

        if not isinstance(container, self.container):
            return False

        if key not in container:
            return False

        self._bind(container)
        self.position = self._order.index(key)
        return True


# end of class _KeyCapsule



@opaque.register
class SetIterator(_KeyCapsule):

    kind = 'netbridge::set_iterator'
    container = wire.WireSet

    def _keys(self, data):
        return data.elements


    def current(self):
        """ Return the current element.
        """

        return self.current_key()


# end of class SetIterator



@opaque.register
class TableIterator(_KeyCapsule):

    kind = 'netbridge::table_iterator'
    container = wire.WireTable

    def _bind(self, data):
        _KeyCapsule._bind(self, data)
        self._values = data.as_dict()


    def _keys(self, data):
        return data.keys()


    def current(self):
        """ Return the current (key, value) pair.
        """

        key = self.current_key()
        return key, self._values[key]


# end of class TableIterator



class _OffsetCapsule(_Capsule):
    """ A capsule whose position marker is an integer offset.
    """

    container = wire.WireVector

    def current(self):
        self._require_bound()

        # Negative offsets must not wrap around to the end.

        if self.position < 0:
            raise IndexError('negative %s offset: %d' % (self.__class__.__name__, self.position))

        return self.data.elements[self.position]


    def serialize(self):

        if self.data is None:
            return None

        return wire.WireVector((self.data, wire.WireInteger(self.position)))


    def deserialize(self, data):

        if not isinstance(data, wire.WireVector) or len(data) != 2:
            return False

        container, offset = data.elements

        if not isinstance(container, wire.WireVector):
            return False

        if not isinstance(offset, wire.WireInteger):
            return False

        self._bind(container)
        self.position = offset.value
        return True


# end of class _OffsetCapsule



@opaque.register
class VectorIterator(_OffsetCapsule):

    kind = 'netbridge::vector_iterator'


@opaque.register
class RecordIterator(_OffsetCapsule):
    """ Iterates over the fields of a record in its wire form. Absent fields
        are visited as :class:`netbridge.wire.WireNone`.
    """

    kind = 'netbridge::record_iterator'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
