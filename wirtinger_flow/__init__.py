# wirtinger_flow/__init__.py
# Forward-mode Wirtinger differentiation of potential-flow computations

from .config import ADConfig, get_config, use_config
from .ad import (
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
    DualError,
    DirectionMismatchError,
    UnknownDirectionError,
    SingularityError,
)
from . import ad, flow
from .flow import dualize_position, dualize_strength

__version__ = "0.1.0"

__all__ = [
    # Config
    'ADConfig', 'get_config', 'use_config',
    # Engine
    'Dual', 'ComplexDirectionDual', 'RealDirectionDual', 'Tag',
    'seed', 'seed_real', 'seed_many', 'seed_pair', 'unit_seeds',
    'derivative', 'real_derivative', 'jacobian',
    'value', 'partials', 'extract_derivative',
    'DualError', 'DirectionMismatchError', 'UnknownDirectionError', 'SingularityError',
    # Subpackages
    'ad', 'flow',
    # Dualization hooks
    'dualize_position', 'dualize_strength',
]
