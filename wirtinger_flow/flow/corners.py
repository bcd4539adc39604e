"""
Local corner and wedge flows.

A corner of order N with exponent nu, strength sigma, bisector direction n0
and length scale L has complex potential

    F(z) = e^{i N pi/2} nu sigma L^{1 - 1/nu} (z conj(n0))^{1/nu}

and induced velocity conj(dF/dz). ``Corner`` is order 1, ``Wedge`` order 2.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..ad.ops import conj, exp, imag
from .elements import Element


@dataclass(frozen=True)
class Corner(Element):
    sigma: Any
    nu: float
    n0: complex = 1.0 + 0.0j
    L: float = 1.0
    order: int = 1

    position_field = None
    strength_field = "sigma"

    @classmethod
    def from_angle(cls, sigma, nu, theta):
        """Corner whose bisector makes angle ``theta`` with the real axis, with L = 1."""
        return cls(sigma, nu, exp(1j * theta), 1.0)

    @property
    def angle(self) -> float:
        return float(np.angle(self.n0))

    def _factor(self):
        return exp(1j * self.order * np.pi / 2)

    def circulation(self):
        # the local flow carries no net circulation
        return 0.0 * self.sigma

    def complexpotential(self, target):
        return (self._factor() * self.nu * self.sigma * self.L ** (1 - 1 / self.nu)
                * (target * conj(self.n0)) ** (1 / self.nu))

    def streamfunction(self, target):
        return imag(self.complexpotential(target))

    def induce_velocity(self, target):
        n0bar = conj(self.n0)
        return conj(self._factor() * self.sigma * (target * n0bar / self.L) ** (1 / self.nu - 1) * n0bar)


@dataclass(frozen=True)
class Wedge(Corner):
    order: int = 2
