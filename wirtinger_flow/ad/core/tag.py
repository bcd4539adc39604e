# ad/core/tag.py
from dataclasses import dataclass
from typing import Any, Hashable, Tuple

import numpy as np

COMPLEX = "complex"
REAL = "real"


@dataclass(frozen=True)
class Tag:
    """
    Identifies the derivative directions carried by a dual.

    Attributes
    ----------
    token : Hashable
        Caller-supplied identity of the seed (e.g. ``None``, a string, a class).
    kind  : str
        ``"complex"`` - two channels (d/dz_k, d/dzbar_k) per direction,
        ``"real"``    - one channel d/dx_k per direction.
    count : int
        Number of tracked directions, fixed at seed time.
    """
    token: Hashable
    kind: str = COMPLEX
    count: int = 1

    def __post_init__(self):
        if self.kind not in (COMPLEX, REAL):
            raise ValueError(f"Tag kind must be '{COMPLEX}' or '{REAL}', got {self.kind!r}")
        if int(self.count) != self.count or self.count < 1:
            raise ValueError(f"Tag count must be a positive integer, got {self.count!r}")

    @property
    def nchannels(self) -> int:
        return 2 if self.kind == COMPLEX else 1

    def zero_partials(self) -> Tuple[np.ndarray, ...]:
        return tuple(np.zeros(self.count, dtype=complex) for _ in range(self.nchannels))

    def unit(self, index: int) -> np.ndarray:
        """Basis vector e_index over the tracked directions."""
        if not 0 <= index < self.count:
            raise ValueError(f"direction index {index} out of range for count={self.count}")
        e = np.zeros(self.count, dtype=complex)
        e[index] = 1.0
        return e

    def constant(self, val: Any):
        """Embed a plain number as a dual of this tag with all-zero partials."""
        from .dual import make_dual  # local import to avoid cycles
        return make_dual(val, self, self.zero_partials())
