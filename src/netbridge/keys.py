""" The composite key rule for sets and tables, shared by the type checker and
    both converters. The two directions must stay symmetric or keys will not
    survive a round trip.

    A set or table index has one or more components. On the wire, a key with
    several components is a vector of those components, and a key with one
    component is that component, unwrapped. This is ambiguous when the sole
    index type is itself record- or vector-shaped, since those also travel as
    vectors: in that case a wire vector is always one component.
"""

from . import wire
from .descriptor import TypeTag


_VECTOR_SHAPED = (TypeTag.RECORD, TypeTag.VECTOR)


def components(key, index_types):
    """ Split the wire *key* into its components according to the sequence
        of *index_types*. The result may have a different length than
        *index_types*; the caller treats that as a mismatch.
    """

    if isinstance(key, wire.WireVector):
        if len(index_types) == 1 and index_types[0].tag in _VECTOR_SHAPED:
            # Disambiguate from a composite key with multiple values.
            return (key,)

        return key.elements

    return (key,)


def join(parts, index_types):
    """ Return the wire key for the sequence of wire components *parts* of a
        key indexed by *index_types*. This is the inverse of
        :func:`components`.
    """

    if len(parts) == 1:
        part = parts[0]

        # A lone vector reads back as a single component only when the index
        # type is vector-shaped. Anything else that travels as a vector
        # (patterns, functions, opaque values) keeps an outer wrapper.

        if isinstance(part, wire.WireVector) and index_types[0].tag not in _VECTOR_SHAPED:
            return wire.WireVector((part,))

        return part

    return wire.WireVector(tuple(parts))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
