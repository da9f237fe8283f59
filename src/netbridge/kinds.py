""" Introspection of wire values: map each wire variant to a :class:`DataType`
    enumerant, for diagnostics or for dynamic dispatch by calling code. No
    conversion is performed.
"""

import enum

from . import wire


class DataType(enum.IntEnum):

    NONE = 0
    BOOL = 1
    COUNT = 2
    INT = 3
    DOUBLE = 4
    STRING = 5
    ADDR = 6
    SUBNET = 7
    PORT = 8
    TIME = 9
    INTERVAL = 10
    ENUM = 11
    SET = 12
    TABLE = 13
    VECTOR = 14


# Records, callables, patterns and opaque values all travel as vectors; there
# is no way to tell from the wire value alone which of these it was.

_data_types = wire.exhaustive({
    wire.WireNone: DataType.NONE,
    wire.WireBool: DataType.BOOL,
    wire.WireCount: DataType.COUNT,
    wire.WireInteger: DataType.INT,
    wire.WireReal: DataType.DOUBLE,
    wire.WireString: DataType.STRING,
    wire.WireAddress: DataType.ADDR,
    wire.WireSubnet: DataType.SUBNET,
    wire.WirePort: DataType.PORT,
    wire.WireTimestamp: DataType.TIME,
    wire.WireTimespan: DataType.INTERVAL,
    wire.WireEnum: DataType.ENUM,
    wire.WireSet: DataType.SET,
    wire.WireTable: DataType.TABLE,
    wire.WireVector: DataType.VECTOR,
}, 'kinds.data_type')


def data_type(data):
    """ Return the :class:`DataType` for the wire value *data*.
    """

    try:
        return _data_types[data.__class__]
    except KeyError:
        raise TypeError('not a wire value: %r' % (data,))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
