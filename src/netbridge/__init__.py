""" Python implementation of a data-exchange bridge for network monitoring
    values. Runtime values, typed against :mod:`netbridge.descriptor` types,
    are converted to and from a dynamically typed wire format; a third, flat
    representation is provided for values handed across threads to logging
    and event pipelines.
"""

# Utility components.

from . import config
from . import errors

# The wire format and the runtime value system.

from . import wire
from . import kinds
from . import descriptor
from . import values
from . import scope
from . import opaque
from . import environment

# Conversions.

from . import keys
from . import check
from . import unpack
from . import pack
from . import data

# Built-in opaque kinds register themselves on import.

from . import iterators
from . import ndarray

from . import threadvalue

# Primary public-facing interfaces.

type_check = check.check
to_runtime = unpack.to_runtime
to_wire = pack.to_wire
make_data = pack.make_data

from .environment import Environment
from .data import DataValue

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
