""" The collaborators a conversion depends on, bundled so they can be
    injected per call site instead of living in process-wide state.
"""

from . import config
from . import errors
from . import opaque
from . import scope as scope_module


class Environment:
    """ An :class:`Environment` carries the name resolver used for callables
        (*scope*), the :class:`netbridge.opaque.OpaqueRegistry` used for
        opaque values (*registry*), and the nesting limit for recursive
        traversals (*max_depth*). Unspecified arguments fall back to an empty
        :class:`netbridge.scope.Scope`, the default registry, and
        :data:`netbridge.config.max_depth`. An explicit *max_depth* may not
        exceed :data:`netbridge.config.MAX_DEPTH_CEILING`.
    """

    def __init__(self, scope=None, registry=None, max_depth=None):

        if scope is None:
            scope = scope_module.Scope()

        if registry is None:
            registry = opaque.registry

        if max_depth is None:
            max_depth = config.max_depth
        elif max_depth < 1 or max_depth > config.MAX_DEPTH_CEILING:
            raise ValueError('max_depth must be between 1 and %d, not %d' % (config.MAX_DEPTH_CEILING, max_depth))

        self.scope = scope
        self.registry = registry
        self.max_depth = max_depth


    def descend(self, depth):
        """ Return *depth* plus one, raising
            :class:`netbridge.errors.NestingTooDeep` if that exceeds the
            nesting limit.
        """

        depth += 1

        if depth > self.max_depth:
            raise errors.NestingTooDeep('value nested deeper than %d levels' % (self.max_depth))

        return depth


# end of class Environment



def resolve(env):
    """ Return *env*, or a default :class:`Environment` if *env* is None.
    """

    if env is None:
        return Environment()

    return env


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
