""" Deferred-typed data. A wire value converted to an ANY type is kept as a
    :class:`DataValue`, uninterpreted, until something casts it to a concrete
    type. Converting a :class:`DataValue` back to the wire yields the wrapped
    wire value unchanged.
"""

from . import check
from . import descriptor
from . import kinds
from . import unpack
from . import wire


class DataValue:

    type = descriptor.ANY

    def __init__(self, data=None):

        if data is None:
            data = wire.WireNone()
        elif not isinstance(data, wire.Wire):
            raise TypeError('not a wire value: %r' % (data,))

        self.data = data


    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented

        return self.data == other.data


    def __hash__(self):
        return hash(self.data)


    def __repr__(self):
        return 'DataValue(%r)' % (self.data,)


    def can_cast_to(self, type, env=None):
        """ Return True if the wrapped data converts to *type*.
        """

        return check.check(self.data, type, env)


    def cast_to(self, type, env=None):
        """ Convert the wrapped data to a runtime value of *type*.
        """

        return unpack.to_runtime(self.data, type, env)


    def data_type(self):
        return kinds.data_type(self.data)


# end of class DataValue


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
