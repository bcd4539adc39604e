# ad/ops/transcendental.py
"""
Holomorphic elementary functions.

For holomorphic f the chain rule has no cross term, so every channel is
multiplied by the same complex derivative f'(u):
    d f(u)/dz    = f'(u) * du/dz
    d f(u)/dzbar = f'(u) * du/dzbar
Plain numbers go straight to NumPy, so dual and plain code paths share the
same principal branches.
"""
import numpy as np

from ..core.dual import Dual, make_dual
from .arithmetic import _checked


def _unary(x, out_val, deriv):
    out_val = _checked(out_val, x)
    return make_dual(out_val, x.tag, tuple(deriv * p for p in x.partials))


def exp(x):
    if not isinstance(x, Dual):
        return np.exp(x)
    ex = np.exp(x.val)
    return _unary(x, ex, ex)


def log(x):
    if not isinstance(x, Dual):
        return np.log(x)
    return _unary(x, np.log(x.val), np.divide(1.0, x.val))


def sqrt(x):
    if not isinstance(x, Dual):
        return np.sqrt(x)
    s = np.sqrt(x.val)
    return _unary(x, s, 0.5 / s)
