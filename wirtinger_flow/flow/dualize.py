"""
Dualization hooks: a dual-valued copy of an element collection with one
scalar field of one element seeded.

    blobs_d = dualize_position(blobs, 2, "z2")
    dwdz, dwdzbar = extract_derivative("z2", induce_velocity(target, blobs_d))

The input is never mutated. Every other element keeps its field values but
has them embedded as constant duals of the same tag, so the whole collection
shares one scalar type.
"""

import logging
from typing import Any, Hashable

import numpy as np

from ..ad.core.extract import value
from ..ad.core.seeds import seed, seed_real
from ..ad.core.tag import Tag, COMPLEX, REAL
from .elements import Kind, kind

logger = logging.getLogger(__name__)


def _rebuild(elements, items):
    if isinstance(elements, np.ndarray):
        out = np.empty(len(items), dtype=object)
        for i, e in enumerate(items):
            out[i] = e
        return out.reshape(elements.shape)
    return type(elements)(items)


def _dualize(elements, index: int, tag: Tag, seeded):
    if kind(elements) is Kind.SINGLETON:
        if index != 0:
            raise IndexError(f"a single element only has index 0, got {index}")
        return seeded(elements.promote(tag))
    items = list(elements.flat if isinstance(elements, np.ndarray) else elements)
    if not -len(items) <= index < len(items):
        raise IndexError(f"element index {index} out of range for {len(items)} elements")
    index %= len(items)
    out = []
    for i, el in enumerate(items):
        if kind(el) is not Kind.SINGLETON:
            raise TypeError("dualization expects a flat collection of elements")
        el = el.promote(tag)
        out.append(seeded(el) if i == index else el)
    return _rebuild(elements, out)


def dualize_position(elements, index: int, token: Hashable = None):
    """
    Copy of ``elements`` whose element ``index`` has a complex-seeded position.

    Derivatives extracted with ``token`` are (d/dz, d/dzbar) of that position.
    """
    tag = Tag(token, COMPLEX)

    def seeded(el):
        return el.with_position(seed(value(el.position()), token))

    logger.debug(f"Dualizing position of element {index} with token {token!r}")
    return _dualize(elements, index, tag, seeded)


def dualize_strength(elements, index: int, token: Hashable = None):
    """
    Copy of ``elements`` whose element ``index`` has a real-seeded strength.

    Derivatives extracted with ``token`` are single sensitivities d/dS.
    """
    tag = Tag(token, REAL)

    def seeded(el):
        return el.with_strength(seed_real(value(el.strength()), token))

    logger.debug(f"Dualizing strength of element {index} with token {token!r}")
    return _dualize(elements, index, tag, seeded)
