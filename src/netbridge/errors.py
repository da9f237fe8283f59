"""Exception taxonomy.

Every failure described here is recoverable: a malformed wire value or an
unrepresentable runtime value fails the one conversion that encountered it,
and nothing else. Callers that do not care about the distinction can catch
:class:`BridgeError`.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for all netbridge errors."""


class ConversionError(BridgeError):
    """A wire value could not be converted to a runtime value."""


class ShapeMismatch(ConversionError):
    """The structure of a wire value does not match the target type."""


class ResolutionError(ConversionError):
    """A named callable entity is missing, is not callable, or rejected
    its captured-variable snapshot."""


class InvalidData(BridgeError):
    """A runtime value could not be converted to a wire value."""


class UnsupportedKind(InvalidData):
    """The runtime value's kind has no wire representation."""


class NestingTooDeep(ConversionError, InvalidData):
    """A value is nested deeper than the configured limit."""


class CapsuleError(BridgeError):
    """An iterator capsule could not be bound, serialized or relocated."""


class TypeClash(BridgeError):
    """A value has no representation in the thread-safe value bridge."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
