"""
Point vortices and regularized vortex blobs.

Kernels return the velocity u + iv (not its conjugate). For a vortex of
circulation S at z0:

    point : w = S * 0.5i / (pi * conj(z - z0))
    blob  : w = S * 0.5i (z - z0) / (pi * (|z - z0|^2 + delta^2))

The blob kernel is the point kernel multiplied by |r|^2 / (|r|^2 + delta^2),
so it is finite at the core.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..ad.ops import conj, imag, log, abs2
from .elements import Element


def cauchy_kernel(z):
    """0.5i / (pi conj(z)), defined as zero at the singular point itself."""
    if z == 0:
        return 0.0 * z
    return 0.5j / (np.pi * conj(z))


def blob_kernel(z, delta):
    return 0.5j * z / (np.pi * (abs2(z) + delta ** 2))


@dataclass(frozen=True)
class Point(Element):
    """Point vortex at ``z`` with circulation ``S``."""
    z: Any
    S: Any

    def induce_velocity(self, target):
        return self.S * cauchy_kernel(target - self.z)

    def complexpotential(self, target):
        return -0.5j * self.S / np.pi * log(target - self.z)

    def streamfunction(self, target):
        return imag(self.complexpotential(target))


@dataclass(frozen=True)
class Blob(Element):
    """Regularized vortex blob at ``z`` with circulation ``S`` and core radius ``delta``."""
    z: Any
    S: Any
    delta: float

    def induce_velocity(self, target):
        return self.S * blob_kernel(target - self.z, self.delta)

    def streamfunction(self, target):
        return -0.25 * self.S / np.pi * log(abs2(target - self.z) + self.delta ** 2)

    def to_point(self):
        return Point(self.z, self.S)
