""" An opaque kind carrying an N-dimensional numpy array. The wire form is a
    vector of the array's dtype, its shape as a vector of counts, and the raw
    array contents base64-encoded as a string.
"""

import base64

try:
    import numpy
except ImportError:
    numpy = None

from . import opaque
from . import wire


@opaque.register
class ArrayValue(opaque.OpaqueValue):

    kind = 'netbridge::ndarray'

    def __init__(self, array=None):

        if array is not None:
            if numpy is None:
                raise ImportError('numpy module not available')

            array = numpy.asarray(array)

        self.array = array


    def __eq__(self, other):
        if not isinstance(other, ArrayValue):
            return NotImplemented

        if self.array is None or other.array is None:
            return self.array is other.array

        if self.array.dtype != other.array.dtype:
            return False

        return bool(numpy.array_equal(self.array, other.array))


    # Arrays may index sets and tables. Elements are hashed as Python
    # scalars so that equal arrays hash alike, 0.0 and -0.0 included.

    def __hash__(self):
        if self.array is None:
            return hash(None)

        elements = tuple(self.array.ravel().tolist())
        return hash((self.array.dtype.str, self.array.shape, elements))


    def __repr__(self):
        return 'ArrayValue(%r)' % (self.array,)


    def serialize(self):

        if self.array is None:
            return None

        array = self.array

        if array.dtype.hasobject:
            raise TypeError('cannot serialize an array of Python objects')

        # A zero-dimensional array keeps its empty shape.

        shape = wire.WireVector(tuple(wire.WireCount(size) for size in array.shape))
        bulk = base64.b64encode(array.tobytes(order='C')).decode('ascii')

        return wire.WireVector((wire.WireString(array.dtype.str), shape, wire.WireString(bulk)))


    def deserialize(self, data):

        if numpy is None:
            raise ImportError('numpy module not available')

        if not isinstance(data, wire.WireVector) or len(data) != 3:
            return False

        dtype, shape, bulk = data.elements

        if not isinstance(dtype, wire.WireString) or not isinstance(bulk, wire.WireString):
            return False

        if not isinstance(shape, wire.WireVector):
            return False

        dimensions = list()

        for size in shape.elements:
            if not isinstance(size, wire.WireCount):
                return False
            dimensions.append(size.value)

        dtype = numpy.dtype(dtype.value)

        if dtype.hasobject:
            return False

        bulk = base64.b64decode(bulk.value, validate=True)
        serialized = numpy.frombuffer(bulk, dtype=dtype)
        self.array = serialized.reshape(dimensions)
        return True


# end of class ArrayValue


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
