# ad/ops/special.py
"""
Non-holomorphic primitives.

Only ``conj`` is a hand-written rule: it swaps the two Wirtinger channels and
conjugates them. ``real``, ``imag``, ``absolute`` and ``abs2`` are composed
from conj, sqrt, multiplication and scaling so their derivatives fall out of
the general rules:
    d|u|/dz = conj(u) / (2|u|),   d|u|/dzbar = u / (2|u|)    (for u = z)
The primal of a composed result is reset to the plain-number answer, so
value-level equality with plain arithmetic is exact.
"""
from ..core.dual import Dual, make_dual
from .arithmetic import add, sub, mul, scale
from .transcendental import sqrt


def conj(x):
    if not isinstance(x, Dual):
        return x.conjugate()
    return make_dual(x.val.conjugate(), x.tag, x._conj_partials())


def _with_primal(d, val):
    return make_dual(val, d.tag, d.partials)


def real(x):
    """real(u) = (u + conj(u)) / 2"""
    if not isinstance(x, Dual):
        return x.real
    return _with_primal(scale(add(x, conj(x)), 0.5), x.val.real)


def imag(x):
    """imag(u) = (u - conj(u)) / (2i)"""
    if not isinstance(x, Dual):
        return x.imag
    return _with_primal(scale(sub(x, conj(x)), -0.5j), x.val.imag)


def absolute(x):
    """|u| = sqrt(u * conj(u))"""
    if not isinstance(x, Dual):
        return abs(x)
    return _with_primal(sqrt(mul(x, conj(x))), abs(x.val))


def abs2(x):
    """|u|^2 = real(u * conj(u))"""
    return real(mul(x, conj(x)))
