"""
Bodies generated by a power-series conformal map from the unit circle.

    z(zeta) = c1 zeta + c0 + sum_{k>=1} c_{-k} zeta^{-k}

The body's centroid ``c`` and orientation ``alpha`` place the map in the
physical plane: z = c + z(zeta) e^{i alpha}. Velocities from
``ConformalBody.induce_velocity`` are evaluated in the circle plane.
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from ..ad.core.extract import value
from ..ad.ops import absolute, conj, exp, imag, real
from . import elements
from .elements import Element
from .points import Blob, Point


@dataclass(frozen=True, eq=False)
class PowerMap:
    """Power-series map with coefficients ccoeff = [c1, c0, c_{-1}, c_{-2}, ...]."""
    ccoeff: np.ndarray

    def __post_init__(self):
        c = np.atleast_1d(np.asarray(self.ccoeff, dtype=complex))
        c.setflags(write=False)
        object.__setattr__(self, "ccoeff", c)

    def __call__(self, zeta):
        c = self.ccoeff
        z = c[0] * zeta
        if len(c) > 1:
            z = z + c[1]
        for k in range(1, len(c) - 1):
            z = z + c[k + 1] * zeta ** (-k)
        return z

    def derivatives(self, zeta) -> Tuple[Any, Any]:
        """(dz/dzeta, d2z/dzeta2)"""
        c = self.ccoeff
        dz = c[0] + 0.0 * zeta
        ddz = 0.0 * zeta
        for k in range(1, len(c) - 1):
            dz = dz - k * c[k + 1] * zeta ** (-k - 1)
            ddz = ddz + k * (k + 1) * c[k + 1] * zeta ** (-k - 2)
        return dz, ddz

    @property
    def dcoeff(self) -> np.ndarray:
        """
        Laurent coefficients of |z|^2 on the unit circle:
            |z(zeta)|^2 = sum_l d_l zeta^{-l} + c.c. terms,
            d_l = sum_m conj(a_m) a_{m+l},  with a = ccoeff.
        """
        a = self.ccoeff
        n = len(a)
        return np.array([np.sum(np.conj(a[:n - l]) * a[l:]) for l in range(n)])

    def __repr__(self):
        return f"Power series map with {len(self.ccoeff)} coefficients"


@dataclass(frozen=True, eq=False)
class ConformalBody(Element):
    """
    Rigid body defined by a power-series map.

    Attributes:
        m: conformal map from the unit circle
        c: centroid
        alpha: orientation angle (radians)
        cdot: translational velocity
        alphadot: angular velocity
        img: image singularities, positioned in the circle plane
    """
    m: PowerMap
    c: Any = 0j
    alpha: float = 0.0
    cdot: complex = 0j
    alphadot: float = 0.0
    img: tuple = ()

    position_field = "c"
    strength_field = None

    def circulation(self):
        return elements.circulation(self.img) if self.img else 0.0

    def __repr__(self):
        return (f"Body generated by: {self.m!r}\n"
                f"  centroid at {np.round(value(self.c), 4)}\n"
                f"  angle {round(self.alpha, 4)}")

    def conftransform(self, zeta):
        """Circle-plane point (or Point/Blob) to the physical plane."""
        if isinstance(zeta, (Point, Blob)):
            return zeta.with_position(self.conftransform(zeta.z))
        return self.c + self.m(zeta) * exp(1j * self.alpha)

    def jacobian(self, zeta):
        if isinstance(zeta, (Point, Blob)):
            zeta = zeta.z
        dz, _ = self.m.derivatives(zeta)
        return dz

    def normal(self, zeta, v):
        """Normal component of the vector v at the surface point with pre-image zeta."""
        dz, _ = self.m.derivatives(zeta)
        return real(v * conj(zeta * dz) / absolute(dz))

    def tangent(self, zeta, v):
        """Counter-clockwise tangent component of v at the surface point with pre-image zeta."""
        dz, _ = self.m.derivatives(zeta)
        return imag(v * conj(zeta * dz) / absolute(dz))

    def _ctilde(self):
        return self.cdot * np.exp(-1j * self.alpha)

    def induce_velocity(self, target):
        """
        Circle-plane velocity u + iv at ``target`` due to the body motion and
        its images. A Point/Blob target gets the Routh-corrected velocity of
        the singularity itself.
        """
        if isinstance(target, (Point, Blob)):
            return self._routh_velocity(target)
        zeta = target
        c1 = self.m.ccoeff[0]
        d = self.m.dcoeff
        dz, _ = self.m.derivatives(zeta)
        ct = self._ctilde()

        zeta_l = 1 / zeta ** 2
        w = ct * conj(c1) * zeta_l + conj(ct) * (dz - c1)
        for l in range(1, len(d)):
            w = w + 1j * l * self.alphadot * d[l] * zeta_l
            zeta_l = zeta_l / zeta
        # the velocity u + iv, not the conjugate velocity
        w = conj(w)
        if self.img:
            w = w + elements.induce_velocity(zeta, self.img)
        return w

    def _routh_velocity(self, target):
        w = self.induce_velocity(target.z)
        z = self.m(target.z)
        dz, ddz = self.m.derivatives(target.z)
        w = w + target.S * conj(ddz) / (4 * np.pi * 1j * conj(dz))
        w = w / conj(dz)
        w = w - (self._ctilde() + 1j * self.alphadot * z)
        return w / dz

    def streamfunction(self, zeta):
        c = self.m.ccoeff
        d = self.m.dcoeff
        z = self.m(zeta)
        ct = self._ctilde()
        c0 = c[1] if len(c) > 1 else 0j

        zeta_l = 1 / zeta
        F = -ct * conj(c[0]) * zeta_l + conj(ct) * (z - c[0] * zeta - c0) - 1j * self.alphadot * d[0]
        for l in range(1, len(d)):
            F = F - 1j * self.alphadot * d[l] * zeta_l
            zeta_l = zeta_l / zeta
        psi = imag(F)
        if self.img:
            psi = psi + elements.streamfunction(zeta, self.img)
        return psi
