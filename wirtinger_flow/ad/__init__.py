# ad/__init__.py
# Forward-mode Wirtinger differentiation via dual numbers

from .core import (
    Dual,
    ComplexDirectionDual,
    RealDirectionDual,
    Tag,
    seed,
    seed_real,
    seed_many,
    seed_pair,
    unit_seeds,
    derivative,
    real_derivative,
    jacobian,
    value,
    partials,
    extract_derivative,
)
from .core.errors import DualError, DirectionMismatchError, UnknownDirectionError, SingularityError

# Primitive rule table
from . import ops
from .ops import sqrt, log, exp, conj, real, imag, absolute, abs2

__all__ = [
    # Core
    'Dual',
    'ComplexDirectionDual',
    'RealDirectionDual',
    'Tag',
    # Seeding
    'seed',
    'seed_real',
    'seed_many',
    'seed_pair',
    'unit_seeds',
    'derivative',
    'real_derivative',
    'jacobian',
    # Extraction
    'value',
    'partials',
    'extract_derivative',
    # Errors
    'DualError',
    'DirectionMismatchError',
    'UnknownDirectionError',
    'SingularityError',
    # Ops
    'ops',
    'sqrt', 'log', 'exp', 'conj', 'real', 'imag', 'absolute', 'abs2',
]
