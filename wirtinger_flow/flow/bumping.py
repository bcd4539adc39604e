"""
Finite-difference (bumping) reference derivatives.

Pure finite differences on plain numbers, used to cross-check the dual engine.

Formulas:
    f_x      = [f(z+h) - f(z-h)] / (2h)
    f_y      = [f(z+ih) - f(z-ih)] / (2h)
    df/dz    = (f_x - i f_y) / 2
    df/dzbar = (f_x + i f_y) / 2
    df/dS    = [f(S+h) - f(S)] / h        (real strength, one-sided)

``f`` may return a scalar or a NumPy array.
"""

from typing import Any, Callable, Optional

import numpy as np

from ..config import get_config
from .elements import Kind, kind


def wirtinger_fd(f: Callable[[complex], Any], z: complex, step: Optional[float] = None):
    """Symmetric-difference estimate of (df/dz, df/dzbar)."""
    h = step if step is not None else get_config().fd_step
    fx = (np.asarray(f(z + h)) - np.asarray(f(z - h))) / (2 * h)
    fy = (np.asarray(f(z + 1j * h)) - np.asarray(f(z - 1j * h))) / (2 * h)
    return (0.5 * (fx - 1j * fy))[()], (0.5 * (fx + 1j * fy))[()]


def real_fd(f: Callable[[float], Any], x: float, step: Optional[float] = None):
    """One-sided estimate of df/dx for a real parameter."""
    h = step if step is not None else get_config().fd_step
    return ((np.asarray(f(x + h)) - np.asarray(f(x))) / h)[()]


def _replace_at(elements, index, el):
    if kind(elements) is Kind.SINGLETON:
        return el
    items = list(elements)
    items[index] = el
    return type(elements)(items) if isinstance(elements, (list, tuple)) else np.array(items, dtype=object)


def position_fd(f: Callable[[Any], Any], elements, index: int, step: Optional[float] = None):
    """(df/dz, df/dzbar) with respect to the position of element ``index``."""
    target = elements if kind(elements) is Kind.SINGLETON else elements[index]
    z0 = target.position()
    return wirtinger_fd(lambda z: f(_replace_at(elements, index, target.with_position(z))), z0, step)


def strength_fd(f: Callable[[Any], Any], elements, index: int, step: Optional[float] = None):
    """df/dS with respect to the strength of element ``index``."""
    target = elements if kind(elements) is Kind.SINGLETON else elements[index]
    s0 = target.strength()
    return real_fd(lambda s: f(_replace_at(elements, index, target.with_strength(s))), s0, step)
