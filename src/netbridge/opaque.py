""" Opaque values: runtime values whose wire representation is defined by the
    value's own kind rather than by this package. Each kind subclasses
    :class:`OpaqueValue` and is registered with an :class:`OpaqueRegistry`
    under its :attr:`OpaqueValue.kind` identifier.

    On the wire an opaque value is a two element vector: the kind identifier,
    followed by whatever the kind's :func:`OpaqueValue.serialize` returned.
"""

import logging

from . import descriptor
from . import errors
from . import wire


logger = logging.getLogger(__name__)


class OpaqueValue:
    """ Base class for opaque kinds. Subclasses set :attr:`kind`, must be
        instantiable without arguments (the registry creates an empty
        instance before calling :func:`deserialize` on it), and implement
        :func:`serialize` and :func:`deserialize`.
    """

    kind = None

    @property
    def type(self):
        return descriptor.OpaqueType(self.kind)


    def serialize(self):
        """ Return the wire representation of this value, or None if it
            cannot be serialized.
        """

        raise NotImplementedError('%s does not implement serialize()' % (self.__class__.__name__))


    def deserialize(self, data):
        """ Restore this instance from the wire value *data*. Returns True on
            success, False if *data* is not a valid representation.
        """

        raise NotImplementedError('%s does not implement deserialize()' % (self.__class__.__name__))


# end of class OpaqueValue



class OpaqueRegistry:
    """ Lookup table of opaque kinds, keyed by kind identifier.
    """

    def __init__(self):
        self._kinds = dict()


    def __contains__(self, kind):
        return kind in self._kinds


    def register(self, cls):
        """ Register the :class:`OpaqueValue` subclass *cls*. Returns *cls*,
            allowing use as a class decorator.
        """

        kind = cls.kind

        if kind is None:
            raise ValueError('%s does not declare a kind' % (cls.__name__))

        # Any runtime value can index a set or table.

        if cls.__hash__ is None:
            raise ValueError('%s instances are not hashable' % (cls.__name__))

        try:
            existing = self._kinds[kind]
        except KeyError:
            pass
        else:
            if existing is not cls:
                raise ValueError('opaque kind %r is already registered to %s' % (kind, existing.__name__))

        self._kinds[kind] = cls
        return cls


    def lookup(self, kind):
        return self._kinds.get(kind)


    def unpack(self, data, kind=None):
        """ Reconstruct an opaque value from its wire form *data*. If *kind*
            is specified the wire form must be of that kind. Raises
            :class:`netbridge.errors.ShapeMismatch` if *data* is not a valid
            representation of a registered kind.
        """

        if not isinstance(data, wire.WireVector) or len(data) != 2:
            raise errors.ShapeMismatch('opaque values are two element vectors')

        name = data[0]

        if not isinstance(name, wire.WireString):
            raise errors.ShapeMismatch('opaque kind must be a string')

        name = name.value

        if kind is not None and name != kind:
            raise errors.ShapeMismatch('expected opaque kind %r, not %r' % (kind, name))

        cls = self._kinds.get(name)

        if cls is None:
            raise errors.ShapeMismatch('unknown opaque kind: %r' % (name))

        instance = cls()

        # Deserializers belong to whoever registered the kind, and any
        # exception they raise is a malformed value.

        try:
            restored = instance.deserialize(data[1])
        except Exception as e:
            raise errors.ShapeMismatch('invalid %s: %s' % (name, e))

        if not restored:
            raise errors.ShapeMismatch('invalid %s' % (name))

        return instance


# end of class OpaqueRegistry



def pack(value):
    """ Return the wire form of the opaque *value*. Raises
        :class:`netbridge.errors.InvalidData` if the kind's serializer fails.
    """

    try:
        payload = value.serialize()
    except Exception as e:
        logger.error("cannot serialize opaque kind %r: %s", value.kind, e)
        raise errors.InvalidData('cannot serialize opaque kind %r: %s' % (value.kind, e))

    if payload is None:
        logger.error("unsupported opaque kind for serialization: %r", value.kind)
        raise errors.InvalidData('unsupported opaque kind for serialization: %r' % (value.kind))

    return wire.WireVector((wire.WireString(value.kind), payload))


# The default registry. Built-in kinds add themselves when netbridge is
# imported; an Environment may be given a different registry.

registry = OpaqueRegistry()
register = registry.register


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
