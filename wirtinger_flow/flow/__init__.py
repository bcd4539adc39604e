"""
Dual-aware potential-flow elements.

Every function here is written against the primitive set of
``wirtinger_flow.ad.ops`` and runs unchanged on plain complex numbers and on
duals produced by ``dualize_position`` / ``dualize_strength``.
"""

from .elements import (
    Kind,
    Element,
    kind,
    position,
    circulation,
    induce_velocity,
    complexpotential,
    streamfunction,
    promote_property_type,
    allocate_velocity,
)
from .points import Point, Blob, cauchy_kernel, blob_kernel
from .corners import Corner, Wedge
from .plates import Plate, RigidBodyMotion, enforce_no_flow_through, unit_impulse
from .bodies import PowerMap, ConformalBody
from .dualize import dualize_position, dualize_strength
from . import chebyshev, bumping

__all__ = [
    'Kind', 'Element', 'kind', 'position', 'circulation',
    'induce_velocity', 'complexpotential', 'streamfunction',
    'promote_property_type', 'allocate_velocity',
    'Point', 'Blob', 'cauchy_kernel', 'blob_kernel',
    'Corner', 'Wedge',
    'Plate', 'RigidBodyMotion', 'enforce_no_flow_through', 'unit_impulse',
    'PowerMap', 'ConformalBody',
    'dualize_position', 'dualize_strength',
    'chebyshev', 'bumping',
]
