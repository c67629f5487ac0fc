from . import cache             # noqa
from . import lattice           # noqa
from . import optimize          # noqa

from .cache import EvaluationCache, get_cache_key                     # noqa
from .lattice import NeighborLattice                                  # noqa
from .optimize import (                                               # noqa
    minimize_discrete_stepwise, maximize_discrete_stepwise,
    parse_step_parameters
)
