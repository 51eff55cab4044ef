"""Core data structures for JAX Vehicle Physics.

This module provides the immutable input (skeleton, collision primitives)
and output (physics object) representations, plus the error types.
"""

from .errors import (
    MalformedPrimitiveError,
    UnsupportedShapeKind,
    VehicleFileError,
    VehiclePhysicsError,
)
from .physics_object import (
    JointMassProperties,
    JointParameters,
    PhysicsJointRecord,
    PhysicsObjectResult,
)
from .vehicle_model import (
    CollisionObject,
    CollisionPrimitive,
    Cylinder,
    Joint,
    OrientedBox,
    Skeleton,
    Sphere,
)

__all__ = [
    "CollisionObject",
    "CollisionPrimitive",
    "Cylinder",
    "Joint",
    "JointMassProperties",
    "JointParameters",
    "MalformedPrimitiveError",
    "OrientedBox",
    "PhysicsJointRecord",
    "PhysicsObjectResult",
    "Skeleton",
    "Sphere",
    "UnsupportedShapeKind",
    "VehicleFileError",
    "VehiclePhysicsError",
]
