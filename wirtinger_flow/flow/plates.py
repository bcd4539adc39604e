"""
Flat plate boundary data.

A plate of length L centred at c, inclined at angle alpha, is sampled at N
Chebyshev nodes. Enforcing no-flow-through stores the Chebyshev coefficients
C of the rotated velocity e^{-i alpha} w induced at those nodes by the
ambient elements, together with the bound circulation and the rigid-body
terms of the plate's own motion. The plate's own induced velocity at
off-plate points is not modelled here.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from ..ad.ops import exp, imag, real, sqrt
from . import chebyshev
from .elements import Element, circulation, induce_velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RigidBodyMotion:
    """Translational velocity ``cdot`` (complex) and angular velocity ``alphadot``."""
    cdot: complex = 0j
    alphadot: float = 0.0


def normal(z, alpha):
    """Component of z normal to a line inclined at alpha."""
    return imag(exp(-1j * alpha) * z)


def tangent(z, alpha):
    """Component of z along a line inclined at alpha."""
    return real(exp(-1j * alpha) * z)


@dataclass(frozen=True, eq=False)
class Plate:
    """
    Attributes:
        N: number of Chebyshev nodes
        L: chord length
        c: centroid
        alpha: inclination (radians)
        C: Chebyshev coefficients of e^{-i alpha} times the induced velocity
        Gamma: bound circulation (minus the circulation of the ambient elements)
        B0, B1: normal translation and rotation terms of the plate motion
    """
    N: int
    L: float
    c: complex
    alpha: float
    C: Any = None
    Gamma: Any = 0.0
    B0: Any = 0.0
    B1: Any = 0.0
    ss: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "ss", chebyshev.nodes(self.N))
        if self.C is None:
            object.__setattr__(self, "C", np.zeros(self.N, dtype=complex))

    @property
    def zs(self) -> np.ndarray:
        """Node positions in the physical plane."""
        return self.c + 0.5 * self.L * self.ss * np.exp(1j * self.alpha)

    @property
    def A(self) -> np.ndarray:
        """Normal-velocity coefficients A[n] = imag(C[n])."""
        if self.C.dtype == object:
            out = np.empty(self.N, dtype=object)
            for n, cn in enumerate(self.C):
                out[n] = imag(cn)
            return out
        return self.C.imag.copy()

    def __repr__(self):
        return (f"Plate: N = {self.N}, L = {self.L}, c = {self.c}, "
                f"alpha = {np.degrees(self.alpha):.1f} deg")


def enforce_no_flow_through(plate: Plate, motion: RigidBodyMotion, elements) -> Plate:
    """
    New plate carrying the boundary data induced by ``elements``.

    Works for plain and dualized element groups alike; the coefficient array
    takes whichever scalar type the elements carry.
    """
    w = induce_velocity(plate.zs, elements)
    C = chebyshev.transform(w * np.exp(-1j * plate.alpha))
    logger.debug(f"No-flow-through enforced on N={plate.N} plate, coefficient dtype {C.dtype}")
    return replace(
        plate,
        C=C,
        Gamma=-circulation(elements),
        B0=normal(motion.cdot, plate.alpha),
        B1=0.5 * motion.alphadot * plate.L,
    )


def unit_impulse(src, plate: Plate):
    """
    Impulse per unit circulation of a vortex at ``src`` (a point or an element)
    together with its image sheet on the plate.
    """
    z = src.position() if isinstance(src, Element) else src
    zt = 2 * (z - plate.c) * np.exp(-1j * plate.alpha) / plate.L
    return -1j * (zt + real(sqrt(zt - 1) * sqrt(zt + 1) - zt))
