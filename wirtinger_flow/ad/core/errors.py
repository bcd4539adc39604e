# ad/core/errors.py
"""
Exceptions raised by the dual-number engine.

All of them are usage errors surfaced at the call that triggered them; none
are recoverable mid-computation. The caller re-seeds and re-runs.
"""


class DualError(Exception):
    """Base class for errors raised by the dual engine."""


class DirectionMismatchError(DualError, ValueError):
    """Two duals seeded with different direction sets met in one operation."""


class UnknownDirectionError(DualError, KeyError):
    """Extraction asked for a direction token (or index) that was never seeded."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class SingularityError(DualError, ArithmeticError):
    """A primitive produced a non-finite primal from finite operands (raise policy only)."""
