# ad/core/dual.py
from __future__ import annotations
import numpy as np
from typing import Any, Tuple

from .tag import Tag, COMPLEX, REAL


class Dual:
    """
    Forward-mode dual value over the complex numbers.

    Attributes
    ----------
    val : complex | float
        Primal value. Always equal to what the same computation produces on
        plain numbers.
    tag : Tag
        Direction set carried by this dual (token, kind, count).
    partials : tuple of np.ndarray
        One complex array of length ``tag.count`` per channel. For the complex
        kind the channels are (d/dz_k, d/dzbar_k); for the real kind (d/dx_k,).

    Duals are immutable: every operation returns a new one.
    """

    __array_priority__ = 1000  # ensures NumPy ufuncs prefer Dual.__array_ufunc__
    __slots__ = ("val", "tag", "partials")

    def __init__(self, val: Any, tag: Tag, partials: Tuple[np.ndarray, ...]):
        if len(partials) != tag.nchannels:
            raise ValueError(
                f"{type(self).__name__} needs {tag.nchannels} partial channel(s), got {len(partials)}"
            )
        object.__setattr__(self, "val", val)
        object.__setattr__(self, "tag", tag)
        object.__setattr__(
            self, "partials",
            tuple(np.asarray(p, dtype=complex).reshape(tag.count) for p in partials),
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        chans = ", ".join(np.array2string(p, precision=6) for p in self.partials)
        return f"{type(self).__name__}({self.val!r}, token={self.tag.token!r}, partials=({chans}))"

    # conjugation is the only kind-specific propagation rule
    def _conj_partials(self):
        raise NotImplementedError

    # ----- plain-number conversions lose derivatives, so refuse them -----
    def __complex__(self):
        raise TypeError(
            f"cannot convert {type(self).__name__} to complex without dropping derivatives; use value()"
        )

    def __float__(self):
        raise TypeError(
            f"cannot convert {type(self).__name__} to float without dropping derivatives; use value()"
        )

    # ----- comparisons act on the primal value -----
    def __eq__(self, other):
        return self.val == (other.val if isinstance(other, Dual) else other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.val)

    def __bool__(self):
        return bool(self.val)

    def __lt__(self, other):
        return self.val < (other.val if isinstance(other, Dual) else other)

    def __le__(self, other):
        return self.val <= (other.val if isinstance(other, Dual) else other)

    def __gt__(self, other):
        return self.val > (other.val if isinstance(other, Dual) else other)

    def __ge__(self, other):
        return self.val >= (other.val if isinstance(other, Dual) else other)

    # ----- arithmetic -----
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    # ----- the complex-number protocol -----
    def __abs__(self):
        from ..ops.special import absolute
        return absolute(self)

    def conjugate(self):
        from ..ops.special import conj
        return conj(self)

    @property
    def real(self):
        from ..ops.special import real
        return real(self)

    @property
    def imag(self):
        from ..ops.special import imag
        return imag(self)

    # methods looked up by NumPy's object-dtype ufunc loops
    def sqrt(self):
        from ..ops.transcendental import sqrt
        return sqrt(self)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def log(self):
        from ..ops.transcendental import log
        return log(self)

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__" or kwargs:
            return NotImplemented
        op = _ufunc_table().get(ufunc)
        if op is None:
            return NotImplemented
        if not any(isinstance(x, np.ndarray) for x in inputs):
            return op(*inputs)
        # Array operand: box the dual so the object loop does not dispatch back here
        args = []
        for x in inputs:
            if isinstance(x, Dual):
                box = np.empty((), dtype=object)
                box[()] = x
                x = box
            args.append(x)
        return np.frompyfunc(op, len(args), 1)(*args)


class ComplexDirectionDual(Dual):
    """Dual seeded by a complex variable: carries (d/dz_k, d/dzbar_k)."""
    __slots__ = ()

    def _conj_partials(self):
        dz, dzbar = self.partials
        return (np.conj(dzbar), np.conj(dz))


class RealDirectionDual(Dual):
    """Dual seeded by a real variable: carries d/dx_k only."""
    __slots__ = ()

    def _conj_partials(self):
        (dx,) = self.partials
        return (np.conj(dx),)


_DUAL_TYPES = {COMPLEX: ComplexDirectionDual, REAL: RealDirectionDual}


def make_dual(val: Any, tag: Tag, partials) -> Dual:
    """Build the dual specialization matching ``tag.kind``."""
    return _DUAL_TYPES[tag.kind](val, tag, partials)


def is_dual(x: Any) -> bool:
    return isinstance(x, Dual)


_UFUNCS = {}


def _ufunc_table():
    if not _UFUNCS:
        from ..ops import arithmetic as ar, transcendental as tr, special as sp
        _UFUNCS.update({
            np.add: ar.add,
            np.subtract: ar.sub,
            np.multiply: ar.mul,
            np.true_divide: ar.div,
            np.negative: ar.neg,
            np.positive: lambda x: x,
            np.power: ar.pow,
            np.square: lambda x: ar.mul(x, x),
            np.reciprocal: lambda x: ar.div(1.0, x),
            np.sqrt: tr.sqrt,
            np.exp: tr.exp,
            np.log: tr.log,
            np.conjugate: sp.conj,
            np.absolute: sp.absolute,
        })
    return _UFUNCS
