"""
Configuration for the dual engine and its finite-difference reference.

Shared settings live in one frozen dataclass; a context manager swaps the
active instance for the duration of a block:

    with use_config(singularity="raise"):
        ... any non-finite primal from finite operands raises SingularityError ...
"""

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Optional

SINGULARITY_POLICIES = ("propagate", "raise")


@dataclass(frozen=True)
class ADConfig:
    """
    Args:
        singularity: "propagate" mirrors the host numeric type at poles
            (Python complex raises ZeroDivisionError, NumPy gives inf/nan);
            "raise" turns any non-finite primal into SingularityError
        fd_step: step for finite-difference reference derivatives
        fd_tol: agreement tolerance between AD and finite differences
    """
    singularity: str = "propagate"
    fd_step: float = 1e-10
    fd_tol: float = 5e-6

    def __post_init__(self):
        if self.singularity not in SINGULARITY_POLICIES:
            raise ValueError(
                f"singularity policy must be one of {SINGULARITY_POLICIES}, got {self.singularity!r}"
            )
        if not self.fd_step > 0:
            raise ValueError(f"fd_step must be positive, got {self.fd_step!r}")


_active = ADConfig()


def get_config() -> ADConfig:
    return _active


@contextmanager
def use_config(config: Optional[ADConfig] = None, **overrides):
    """
    Temporarily activate ``config`` (default: the current one) with ``overrides`` applied.
    The previous configuration is restored on exit, also on error.
    """
    global _active
    prev = _active
    try:
        _active = replace(config or prev, **overrides)
        yield _active
    finally:
        _active = prev
