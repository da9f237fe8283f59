""" The wire value model: a closed tagged union of immutable
    :class:`msgspec.Struct` variants. Wire values carry no type information
    beyond their own variant; structural typing is always supplied by the
    target :mod:`netbridge.descriptor` type at conversion time.

    Every wire value is frozen and hashable, which is what allows any of them,
    including containers, to be a set member or a table key.
"""

import decimal
import enum
import ipaddress

import msgspec


_COUNT_MAX = 2 ** 64 - 1
_INTEGER_MIN = -2 ** 63
_INTEGER_MAX = 2 ** 63 - 1
_NS_PER_SECOND = 10 ** 9

_V4_MAPPED_PREFIX = b'\x00' * 10 + b'\xff\xff'


class TransportProto(enum.IntEnum):
    """ Transport protocol of a port number.
    """

    UNKNOWN = 0
    TCP = 1
    UDP = 2
    ICMP = 3

    def __str__(self):
        return self.name.lower()


class Wire(msgspec.Struct, frozen=True, tag=True):
    """ Base class for every wire value variant. Not instantiated directly.
    """


class WireNone(Wire, tag='none'):
    pass


class WireBool(Wire, tag='bool'):
    value: bool


class WireCount(Wire, tag='count'):
    """ An unsigned 64-bit integer. Used for both plain counts and monotonic
        counters; the distinction exists only in the runtime type.
    """

    value: int

    def __post_init__(self):
        if self.value < 0 or self.value > _COUNT_MAX:
            raise ValueError('count out of range: %r' % (self.value,))


class WireInteger(Wire, tag='integer'):

    value: int

    def __post_init__(self):
        if self.value < _INTEGER_MIN or self.value > _INTEGER_MAX:
            raise ValueError('integer out of range: %r' % (self.value,))


class WireReal(Wire, tag='real'):
    value: float


class WireString(Wire, tag='string'):
    value: str


class WireAddress(Wire, tag='address'):
    """ An IP address, always 16 bytes in network byte order. IPv4 addresses
        are stored in their v4-mapped IPv6 form.
    """

    data: bytes

    def __post_init__(self):
        if len(self.data) != 16:
            raise ValueError('address must be 16 bytes, not %d' % (len(self.data)))


    @classmethod
    def of(cls, address):
        """ Build a :class:`WireAddress` from an :mod:`ipaddress` object or
            its string representation.
        """

        address = ipaddress.ip_address(address)

        if address.version == 4:
            return cls(_V4_MAPPED_PREFIX + address.packed)

        return cls(address.packed)


    def is_v4(self):
        return self.data[:12] == _V4_MAPPED_PREFIX


    def to_ip(self):
        if self.is_v4():
            return ipaddress.IPv4Address(self.data[12:])

        return ipaddress.IPv6Address(self.data)


class WireSubnet(Wire, tag='subnet'):
    """ A network prefix. The *length* is relative to the family of the
        network address: at most 32 for IPv4, 128 for IPv6.
    """

    network: WireAddress
    length: int

    def __post_init__(self):
        limit = 32 if self.network.is_v4() else 128
        if self.length < 0 or self.length > limit:
            raise ValueError('prefix length out of range: %r' % (self.length,))


    @classmethod
    def of(cls, network):
        """ Build a :class:`WireSubnet` from an :mod:`ipaddress` network or
            its string representation. An IPv6 network inside
            ``::ffff:0:0/96`` is stored as the IPv4 network it maps, with
            the prefix length reduced by 96, and reads back as IPv4.
        """

        network = ipaddress.ip_network(network, strict=False)
        prefixlen = network.prefixlen

        if network.version == 6 and network.network_address.ipv4_mapped is not None:
            prefixlen -= 96

        return cls(WireAddress.of(network.network_address), prefixlen)


    def to_network(self):
        return ipaddress.ip_network((self.network.to_ip(), self.length), strict=False)


class WirePort(Wire, tag='port'):

    number: int
    protocol: TransportProto = TransportProto.UNKNOWN

    def __post_init__(self):
        if self.number < 0 or self.number > 65535:
            raise ValueError('port out of range: %r' % (self.number,))


class WireTimestamp(Wire, tag='timestamp'):
    """ Nanoseconds since the UNIX epoch.
    """

    ns: int


class WireTimespan(Wire, tag='timespan'):
    """ A duration in nanoseconds.
    """

    ns: int


class WireEnum(Wire, tag='enum'):
    """ An enumerated value, identified by its label rather than its ordinal.
    """

    name: str


class WireSet(Wire, tag='set'):

    elements: frozenset = frozenset()

    def __post_init__(self):
        if not isinstance(self.elements, frozenset):
            raise TypeError('set elements must be a frozenset')

        _require_wire(self.elements)


    @classmethod
    def of(cls, elements=()):
        return cls(frozenset(elements))


    def __contains__(self, element):
        return element in self.elements


    def __len__(self):
        return len(self.elements)


class WireTable(Wire, tag='table'):
    """ A mapping between wire values. The *entries* are (key, value) pairs;
        keys are unique.
    """

    entries: frozenset = frozenset()

    def __post_init__(self):
        if not isinstance(self.entries, frozenset):
            raise TypeError('table entries must be a frozenset')

        keys = set()

        for key, value in self.entries:
            if key in keys:
                raise ValueError('duplicate table key: %r' % (key,))

            keys.add(key)

        _require_wire(keys)
        _require_wire(value for key, value in self.entries)


    @classmethod
    def of(cls, mapping=None):
        """ Build a :class:`WireTable` from a dictionary, or from an iterable
            of (key, value) pairs.
        """

        if mapping is None:
            return cls()

        try:
            pairs = mapping.items()
        except AttributeError:
            pairs = mapping

        return cls(frozenset(pairs))


    def as_dict(self):
        return dict(self.entries)


    def keys(self):
        return [key for key, value in self.entries]


    def __contains__(self, key):
        for existing, value in self.entries:
            if existing == key:
                return True

        return False


    def __len__(self):
        return len(self.entries)


class WireVector(Wire, tag='vector'):
    """ An ordered sequence of wire values. Records, callables, patterns and
        opaque values all travel as vectors.
    """

    elements: tuple = ()

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            raise TypeError('vector elements must be a tuple')

        _require_wire(self.elements)


    @classmethod
    def of(cls, elements=()):
        return cls(tuple(elements))


    def __getitem__(self, index):
        return self.elements[index]


    def __len__(self):
        return len(self.elements)


# The complete set of variants. Every consumer that dispatches on the wire
# variant builds its table through exhaustive() below.

VARIANTS = (
    WireNone,
    WireBool,
    WireCount,
    WireInteger,
    WireReal,
    WireString,
    WireAddress,
    WireSubnet,
    WirePort,
    WireTimestamp,
    WireTimespan,
    WireEnum,
    WireSet,
    WireTable,
    WireVector,
)


def exhaustive(table, consumer):
    """ Confirm the dispatch *table*, keyed by wire variant, handles every
        variant; *consumer* names the table for the error message. Returns
        the table so this can wrap a module-level assignment.
    """

    missing = [variant.__name__ for variant in VARIANTS if variant not in table]

    if missing:
        raise RuntimeError('%s does not handle %s' % (consumer, ', '.join(missing)))

    return table


def _require_wire(values):

    for value in values:
        if not isinstance(value, Wire):
            raise TypeError('not a wire value: %r' % (value,))


def seconds_to_ns(seconds):
    """ Convert floating point seconds to integer nanoseconds. The conversion
        goes through the shortest decimal representation of *seconds*, so
        no binary floating point error accumulates; sub-nanosecond digits are
        truncated toward zero.
    """

    exact = decimal.Decimal(repr(float(seconds)))
    return int(exact * _NS_PER_SECOND)


def ns_to_seconds(ns):
    return ns / _NS_PER_SECOND


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
