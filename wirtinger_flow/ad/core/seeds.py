# ad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dz/dz = 1) at the input and let derivatives flow forward
# through every primitive the computation performs.
#-----------------------------------------------------------------------------
from __future__ import annotations
import logging
from typing import Any, Callable, Hashable, Iterable, List, Tuple

import numpy as np

from .dual import Dual, make_dual
from .extract import extract_derivative, value
from .tag import Tag, COMPLEX, REAL

logger = logging.getLogger(__name__)


def unit_seeds(token: Hashable = None, index: int = 0, count: int = 1) -> Tuple[tuple, tuple]:
    """
    The two canonical unit partial pairs of a complex variable at ``index``:
      holomorphic unit      (dz, dzbar) = (e_index, 0)
      anti-holomorphic unit (dz, dzbar) = (0, e_index)

    These are the partials of ``seed_pair(z)``: ``z`` itself and ``conj(z)``.
    """
    tag = Tag(token, COMPLEX, count)
    e = tag.unit(index)
    zero = np.zeros(count, dtype=complex)
    return (e, zero.copy()), (zero.copy(), e.copy())


def seed(z: Any, token: Hashable = None, index: int = 0, count: int = 1) -> Dual:
    """Complex variable ``z`` differentiated with respect to itself in direction ``index``."""
    if isinstance(z, Dual):
        raise TypeError(f"cannot seed a value that is already a dual: {z!r}")
    holo, _ = unit_seeds(token, index, count)
    logger.debug(f"Seeding complex direction {index}/{count} token={token!r} at {z!r}")
    return make_dual(z, Tag(token, COMPLEX, count), holo)


def seed_pair(z: Any, token: Hashable = None, index: int = 0, count: int = 1) -> Tuple[Dual, Dual]:
    """
    The two unit duals of a complex variable, one per real degree of freedom:
    ``z`` carrying (e_index, 0) and ``conj(z)`` carrying (0, e_index).
    """
    d = seed(z, token, index, count)
    return d, d.conjugate()


def seed_real(x: Any, token: Hashable = None, index: int = 0, count: int = 1) -> Dual:
    """Real variable ``x`` (e.g. a circulation) with unit sensitivity in direction ``index``."""
    if isinstance(x, Dual):
        raise TypeError(f"cannot seed a value that is already a dual: {x!r}")
    if np.iscomplexobj(x):
        raise TypeError(f"real seed needs a real value, got {x!r}")
    tag = Tag(token, REAL, count)
    logger.debug(f"Seeding real direction {index}/{count} token={token!r} at {x!r}")
    return make_dual(x, tag, (tag.unit(index),))


def seed_many(zs: Iterable[Any], token: Hashable = None, real: bool = False) -> List[Dual]:
    """
    Seed every value in ``zs`` with its own direction (index = position in zs),
    so one pass yields the full Jacobian.
    """
    zs = list(zs)
    make = seed_real if real else seed
    return [make(z, token, k, len(zs)) for k, z in enumerate(zs)]


class _DriverToken:
    """Private direction identity for the convenience drivers below."""

    def __repr__(self):
        return "<driver>"


def _zero_like(x, n=None):
    shape = np.shape(value(x)) + (() if n is None else (n,))
    return np.zeros(shape, dtype=complex)[()] if shape else 0j


# ----------------------------- single-input derivative ----------------------------- #
def derivative(f: Callable[[Any], Any], z0: Any):
    """
    Wirtinger derivatives (df/dz, df/dzbar) of f at z0.

    A plain-number result (f independent of z) gives zero derivatives.
    """
    token = _DriverToken()
    w = f(seed(z0, token))
    if not any(isinstance(d, Dual) for d in _flatten(w)):
        zero = _zero_like(w)
        return zero, zero
    return extract_derivative(token, w)


def real_derivative(f: Callable[[Any], Any], x0: float):
    """Sensitivity df/dx of f at the real point x0."""
    token = _DriverToken()
    w = f(seed_real(x0, token))
    if not any(isinstance(d, Dual) for d in _flatten(w)):
        return _zero_like(w)
    return extract_derivative(token, w)


# ----------------------------- multi-input jacobian ----------------------------- #
def jacobian(f: Callable[[List[Dual]], Any], z0_list: Iterable[Any]):
    """
    Jacobian pair (J, Jbar) of f at the list of complex inputs, in one pass.

    For a scalar output J has shape (n,); for m outputs (m, n), with
    J[i, k] = d f_i / d z_k and Jbar[i, k] = d f_i / d zbar_k.

    Example
    -------
    f = lambda zs: zs[0] * zs[1].conjugate()
    jacobian(f, [1j, 2.0]) -> (array([2, 0]), array([0, 1j]))
    """
    z0_list = list(z0_list)
    token = _DriverToken()
    w = f(seed_many(z0_list, token))
    if not any(isinstance(d, Dual) for d in _flatten(w)):
        zero = _zero_like(w, len(z0_list))
        return zero, zero.copy()
    if isinstance(w, Dual):
        return extract_derivative(token, w)
    w = np.asarray(list(w) if not isinstance(w, np.ndarray) else w, dtype=object)
    w = np.array([d if isinstance(d, Dual) else Tag(token, COMPLEX, len(z0_list)).constant(d)
                  for d in w.flat], dtype=object).reshape(w.shape)
    return extract_derivative(token, w)


def _flatten(w):
    if isinstance(w, Dual):
        return [w]
    if isinstance(w, dict):
        w = list(w.values())
    if isinstance(w, (list, tuple)) or (isinstance(w, np.ndarray) and w.dtype == object):
        out = []
        for e in (w.flat if isinstance(w, np.ndarray) else w):
            out.extend(_flatten(e))
        return out
    return []
