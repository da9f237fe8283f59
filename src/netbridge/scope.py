""" Callable entities and name resolution. Callables cross the wire by name
    only; the receiving side resolves the name against a :class:`Scope`
    supplied by the caller, so the set of resolvable entities is whatever the
    caller chooses to expose.
"""

from . import config
from . import values


class Function:
    """ A named callable entity. The *body* is any Python callable.

        A function capable of capturing variables declares the type of each
        one in *capture_types*, a dictionary of name to
        :mod:`netbridge.descriptor` type; its current captured values live in
        :attr:`captures`. Functions without *capture_types* cannot carry
        captured state.
    """

    def __init__(self, name, body=None, capture_types=None, captures=None):

        self.name = name
        self.body = body
        self.capture_types = capture_types
        self.captures = dict()

        if captures:
            if capture_types is None:
                raise ValueError('function %s does not capture variables' % (name))
            self.update_captures(captures)


    def __call__(self, *args, **kwargs):

        if self.body is None:
            raise RuntimeError('function %s has no body' % (self.name))

        return self.body(*args, **kwargs)


    def __repr__(self):
        return 'Function(%r)' % (self.name)


    def is_lambda(self):
        """ Return True if this function's captured state travels with it
            when it is serialized.
        """

        return self.name.startswith(config.LAMBDA_PREFIX)


    def update_captures(self, captures):
        """ Replace captured values according to the *captures* dictionary,
            leaving any captured variable not named there untouched. A value
            of None clears the captured variable.
        """

        if self.capture_types is None:
            raise ValueError('function %s does not capture variables' % (self.name))

        for name in captures.keys():
            if name not in self.capture_types:
                raise KeyError('function %s does not capture %r' % (self.name, name))

        for name, value in captures.items():
            if value is None:
                self.captures.pop(name, None)
            else:
                self.captures[name] = value


# end of class Function



class Scope:
    """ A dictionary-backed resolver of global names. Any object with a
        compatible :func:`lookup` method can stand in for a :class:`Scope`.
    """

    def __init__(self):
        self._ids = dict()


    def __contains__(self, name):
        return name in self._ids


    def __len__(self):
        return len(self._ids)


    def define(self, name, value):
        """ Bind *name* to the runtime *value*.
        """

        self._ids[name] = value


    def define_function(self, function):
        """ Bind a :class:`Function` under its own name, and return the
            :class:`netbridge.values.FuncValue` referring to it.
        """

        value = values.FuncValue(function)
        self._ids[function.name] = value
        return value


    def lookup(self, name):
        """ Return the runtime value bound to *name*, or None.
        """

        return self._ids.get(name)


# end of class Scope


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
