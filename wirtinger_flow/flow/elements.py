"""
Element base class and Singleton/Group dispatch.

Every flow element is a frozen dataclass with at most one position field and
one strength field. Collections of elements (lists, tuples, object arrays,
nested arbitrarily and mixing element types) are Groups; the free functions
below treat a single element and a group uniformly.

Physics code here and in the element modules is written only against the
primitive set of ``wirtinger_flow.ad.ops``, so the same functions run on
plain complex numbers and on duals.
"""

import dataclasses
from enum import Enum
from typing import Any, Optional

import numpy as np

from ..ad.core.dual import Dual
from ..ad.core.errors import DirectionMismatchError
from ..ad.core.tag import Tag


class Kind(Enum):
    SINGLETON = "singleton"
    GROUP = "group"


class Element:
    """
    Mixin for dataclass elements.

    Subclasses name their scalar fields through ``position_field`` and
    ``strength_field`` (None when the element has no such field).
    """
    position_field: Optional[str] = "z"
    strength_field: Optional[str] = "S"

    def position(self):
        if self.position_field is None:
            raise TypeError(f"{type(self).__name__} has no position field")
        return getattr(self, self.position_field)

    def strength(self):
        if self.strength_field is None:
            raise TypeError(f"{type(self).__name__} has no strength field")
        return getattr(self, self.strength_field)

    def circulation(self):
        return self.strength()

    def with_position(self, z):
        """Copy of this element with the position replaced."""
        if self.position_field is None:
            raise TypeError(f"{type(self).__name__} has no position field")
        return dataclasses.replace(self, **{self.position_field: z})

    def with_strength(self, s):
        """Copy of this element with the strength replaced."""
        if self.strength_field is None:
            raise TypeError(f"{type(self).__name__} has no strength field")
        return dataclasses.replace(self, **{self.strength_field: s})

    def _property_fields(self):
        return [f for f in (self.position_field, self.strength_field) if f is not None]

    def property_type(self):
        """Scalar type of the element's properties: a Tag if any is a dual, else ``complex``."""
        return _merge_types(getattr(self, f) for f in self._property_fields())

    def promote(self, tag: Tag):
        """Copy with every plain property embedded as a constant dual of ``tag``."""
        changes = {}
        for name in self._property_fields():
            v = getattr(self, name)
            if isinstance(v, Dual):
                if v.tag != tag:
                    raise DirectionMismatchError(
                        f"{type(self).__name__}.{name} already carries {v.tag}, cannot promote to {tag}"
                    )
                continue
            changes[name] = tag.constant(v)
        return dataclasses.replace(self, **changes)

    # physics interface
    def induce_velocity(self, target):
        raise NotImplementedError(f"{type(self).__name__} does not induce velocity")

    def complexpotential(self, target):
        raise NotImplementedError(f"{type(self).__name__} has no complex potential")

    def streamfunction(self, target):
        raise NotImplementedError(f"{type(self).__name__} has no streamfunction")


def kind(obj: Any) -> Kind:
    if isinstance(obj, Element):
        return Kind.SINGLETON
    if isinstance(obj, (list, tuple, np.ndarray)):
        return Kind.GROUP
    raise TypeError(f"{type(obj).__name__} is neither an element nor a group of elements")


def _members(group):
    return group.flat if isinstance(group, np.ndarray) else group


def _merge_types(values):
    tag = None
    for v in values:
        t = v.tag if isinstance(v, Dual) else (v if isinstance(v, Tag) else None)
        if t is None:
            continue
        if tag is None:
            tag = t
        elif t != tag:
            raise DirectionMismatchError(f"mixed direction sets {tag} and {t}")
    return complex if tag is None else tag


def promote_property_type(*objs):
    """
    Scalar type shared by elements, groups and scalars: the common Tag when
    any of them carries duals, else ``complex``.
    """
    def types(obj):
        if isinstance(obj, Element):
            yield obj.property_type()
        elif isinstance(obj, (list, tuple, np.ndarray)):
            for e in _members(obj):
                yield from types(e)
        elif isinstance(obj, Dual):
            yield obj.tag
    return _merge_types(t for obj in objs for t in types(obj))


def allocate_velocity(targets, scalar_type=complex, real: bool = False) -> np.ndarray:
    """
    Zeroed buffer shaped like ``targets`` holding scalars of ``scalar_type``.

    With ``real=True`` the zeros are real (a streamfunction buffer) for plain
    and dual scalar types alike.
    """
    shape = np.shape(targets)
    zero = 0.0 if real else 0j
    if isinstance(scalar_type, Tag):
        out = np.empty(shape, dtype=object)
        for i in np.ndindex(shape):
            out[i] = scalar_type.constant(zero)
        return out
    if real and scalar_type is complex:
        scalar_type = float
    return np.zeros(shape, dtype=scalar_type)


def position(obj):
    if kind(obj) is Kind.SINGLETON:
        return obj.position()
    return [position(e) for e in _members(obj)]


def circulation(obj):
    """Net circulation: the strength of an element, summed over a group."""
    if kind(obj) is Kind.SINGLETON:
        return obj.circulation()
    total = 0.0
    for e in _members(obj):
        total = total + circulation(e)
    return total


def _is_targets(target) -> bool:
    return isinstance(target, (list, tuple, np.ndarray)) and not isinstance(target, Element)


def _accumulate(method, target, source):
    if kind(source) is Kind.SINGLETON:
        return getattr(source, method)(target)
    total = 0.0
    for s in _members(source):
        total = total + _accumulate(method, target, s)
    return total


def _evaluate(method, target, source, real_valued=False):
    if not _is_targets(target):
        return _accumulate(method, target, source)
    targets = target if isinstance(target, np.ndarray) else np.asarray(target, dtype=object)
    stype = promote_property_type(targets, source)
    out = allocate_velocity(targets, stype, real=real_valued)
    for idx in np.ndindex(targets.shape):
        out[idx] = out[idx] + _accumulate(method, targets[idx], source)
    return out


def induce_velocity(target, source):
    """
    Velocity (u + iv) induced at ``target`` by ``source``.

    ``target`` is a point (complex or dual), an element, or an array/list of
    points; ``source`` is an element or a group. Group contributions add.
    """
    return _evaluate("induce_velocity", target, source)


def complexpotential(target, source):
    return _evaluate("complexpotential", target, source)


def streamfunction(target, source):
    return _evaluate("streamfunction", target, source, real_valued=True)
