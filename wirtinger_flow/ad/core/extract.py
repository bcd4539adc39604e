# ad/core/extract.py
"""
Projections out of duals: primal values and partials.

All three functions distribute over containers (lists, tuples, dicts and
NumPy arrays, nested arbitrarily) and never mutate their argument.
"""
from __future__ import annotations
from typing import Any, Callable, Hashable, Optional

import numpy as np

from .dual import Dual
from .errors import DirectionMismatchError, UnknownDirectionError
from .tag import COMPLEX, Tag


def _is_container(x: Any) -> bool:
    return isinstance(x, (list, tuple, dict, np.ndarray))


def _map(fn: Callable[[Any], Any], x: Any) -> Any:
    """Apply fn to every leaf, rebuilding the container shape around the results."""
    if isinstance(x, np.ndarray):
        if x.dtype != object:
            return fn(x)
        leaves = [_map(fn, e) for e in x.flat]
        out = np.array(leaves)
        return out.reshape(x.shape + out.shape[1:]) if leaves else out.reshape(x.shape)
    if isinstance(x, dict):
        return {k: _map(fn, v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return type(x)(_map(fn, e) for e in x)
    return fn(x)


def _leaves(x: Any):
    if isinstance(x, dict):
        x = list(x.values())
    if isinstance(x, np.ndarray) and x.dtype != object:
        return
    if _is_container(x):
        for e in (x.flat if isinstance(x, np.ndarray) else x):
            yield from _leaves(e)
    else:
        yield x


def value(x: Any) -> Any:
    """Return the primal value(s); plain numbers pass through unchanged."""
    return _map(lambda d: d.val if isinstance(d, Dual) else d, x)


def partials(d: Dual):
    """
    All partials of a single dual as parallel sequences:
      complex kind -> (dz, dzbar), each of length tag.count
      real kind    -> dx
    """
    if not isinstance(d, Dual):
        raise UnknownDirectionError(f"{d!r} is not a dual and carries no partials")
    if d.tag.kind == COMPLEX:
        dz, dzbar = d.partials
        return dz.copy(), dzbar.copy()
    return d.partials[0].copy()


def _select(p: np.ndarray, index: Optional[int], count: int):
    if index is None:
        return p[0] if count == 1 else p.copy()
    if not -count <= index < count:
        raise UnknownDirectionError(f"direction index {index} was never seeded (count={count})")
    return p[index]


def _channel(token: Hashable, tag: Tag, channel: int, index: Optional[int]):
    def project(d):
        if not isinstance(d, Dual):
            raise UnknownDirectionError(
                f"direction {token!r} was never seeded: {d!r} is not a dual"
            )
        if d.tag.token != token:
            raise UnknownDirectionError(
                f"direction {token!r} was never seeded; value carries {d.tag.token!r}"
            )
        if d.tag != tag:
            raise DirectionMismatchError(
                f"cannot extract {token!r} from mixed direction sets {tag} and {d.tag}"
            )
        out = _select(d.partials[channel], index, d.tag.count)
        # a real seed flowing into a real primal yields a real sensitivity
        if d.tag.kind != COMPLEX and not np.iscomplexobj(d.val):
            out = np.real(out)
        return out
    return project


def extract_derivative(token: Hashable, x: Any, index: Optional[int] = None):
    """
    Derivative(s) of ``x`` with respect to the seed identified by ``token``.

    Returns
    -------
    complex seed : (d/dz, d/dzbar), each shaped like ``x``
    real seed    : d/dx, shaped like ``x``

    With ``index=None`` a single-direction seed gives scalars per leaf and a
    multi-direction seed gives arrays of length ``count``; an explicit index
    selects one direction.
    """
    first = next((d for d in _leaves(x) if isinstance(d, Dual)), None)
    if first is None:
        raise UnknownDirectionError(f"direction {token!r} was never seeded: no dual in {type(x).__name__}")
    tag = first.tag
    if tag.kind == COMPLEX:
        return _map(_channel(token, tag, 0, index), x), _map(_channel(token, tag, 1, index), x)
    return _map(_channel(token, tag, 0, index), x)
