# ad/core/__init__.py

"""
Core public API of the dual engine.

Exports:
    Dual, ComplexDirectionDual, RealDirectionDual : the dual value types.
    Tag              : direction identity (token, kind, count).
    seed, seed_real  : plant a complex / real seed.
    seed_many        : one direction per input, for Jacobians.
    unit_seeds       : the canonical (1,0) / (0,1) partial pairs.
    seed_pair        : the matching unit duals z and conj(z).
    derivative, real_derivative, jacobian : convenience drivers.
    value, partials, extract_derivative   : projections out of duals.
"""

from .dual import Dual, ComplexDirectionDual, RealDirectionDual, make_dual, is_dual
from .tag import Tag, COMPLEX, REAL
from .errors import DualError, DirectionMismatchError, UnknownDirectionError, SingularityError
from .seeds import seed, seed_real, seed_many, seed_pair, unit_seeds, derivative, real_derivative, jacobian
from .extract import value, partials, extract_derivative

__all__ = [
    "Dual", "ComplexDirectionDual", "RealDirectionDual", "make_dual", "is_dual",
    "Tag", "COMPLEX", "REAL",
    "DualError", "DirectionMismatchError", "UnknownDirectionError", "SingularityError",
    "seed", "seed_real", "seed_many", "seed_pair", "unit_seeds", "derivative", "real_derivative", "jacobian",
    "value", "partials", "extract_derivative",
]
