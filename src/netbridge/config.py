""" Process-wide defaults for :mod:`netbridge`. Values are read once from the
    environment at import time; an :class:`netbridge.environment.Environment`
    instance can override them for a specific call site.
"""

import os


def _integer(name, default, ceiling=None):

    raw = os.environ.get(name)

    if raw is None or raw == '':
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ValueError("%s must be an integer, not %r" % (name, raw))

    if value < 1:
        raise ValueError("%s must be positive, not %d" % (name, value))

    if ceiling is not None and value > ceiling:
        raise ValueError("%s must be at most %d, not %d" % (name, ceiling, value))

    return value


# Each level of nesting costs a few interpreter stack frames; past this many
# levels the interpreter's own recursion limit would be hit first.

MAX_DEPTH_CEILING = 250


# Every recursive traversal of a wire value (type checking, conversion in
# either direction, conversion to thread values) refuses to descend further
# than this. Wire values may originate from an untrusted peer.

max_depth = _integer('NETBRIDGE_MAX_DEPTH', 100, MAX_DEPTH_CEILING)


# Enumerated values serialize by name. An ordinal with no matching label in
# its enum type serializes as this sentinel instead of failing.

UNKNOWN_ENUM = '<unknown enum>'


# Only functions with this name prefix carry captured variables.

LAMBDA_PREFIX = 'lambda_<'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
