"""Closed-form mass properties of single collision primitives.

Masses are volumes at unit density. Local inertia tensors are expressed in
the primitive's own principal axes; :func:`local_frame` gives the rotation
that brings them into the parent frame.
"""

import jax.numpy as jnp
from jax import Array

from .core import (
    CollisionPrimitive,
    Cylinder,
    MalformedPrimitiveError,
    OrientedBox,
    Sphere,
    UnsupportedShapeKind,
)
from .transforms import so3


def _shape_kind(primitive) -> str:
    return type(primitive).__name__


def check_arity(primitive: CollisionPrimitive) -> None:
    """Raise MalformedPrimitiveError if the companion vector count is wrong.

    Raises:
        MalformedPrimitiveError: wrong number of position vectors.
        UnsupportedShapeKind: not a sphere, oriented box or cylinder.
    """
    if not isinstance(primitive, (Sphere, OrientedBox, Cylinder)):
        raise UnsupportedShapeKind(_shape_kind(primitive))

    found = len(primitive.vectors)
    if found != primitive.expected_vectors:
        raise MalformedPrimitiveError(
            _shape_kind(primitive), primitive.joint_index, primitive.expected_vectors, found
        )


def volume_of(primitive: CollisionPrimitive) -> Array:
    """Volume of a primitive, used as its mass at unit density.

    Args:
        primitive: Sphere, OrientedBox or Cylinder.

    Returns:
        Scalar volume >= 0.

    Raises:
        UnsupportedShapeKind: for any other object.
    """
    if isinstance(primitive, Sphere):
        return (4.0 / 3.0) * jnp.pi * jnp.asarray(primitive.radius) ** 3
    if isinstance(primitive, OrientedBox):
        hx, hy, hz = jnp.asarray(primitive.half_extents)
        return 8.0 * hx * hy * hz
    if isinstance(primitive, Cylinder):
        r = jnp.asarray(primitive.radius)
        return jnp.pi * r ** 2 * (2.0 * jnp.asarray(primitive.half_length))
    raise UnsupportedShapeKind(_shape_kind(primitive))


def local_inertia(primitive: CollisionPrimitive, mass: Array) -> Array:
    """Inertia tensor of a primitive about its anchor, in its local axes.

    Args:
        primitive: Sphere, OrientedBox or Cylinder.
        mass: Mass of the primitive, normally ``volume_of(primitive)``.

    Returns:
        (3, 3) diagonal tensor. Cylinders use local Z as the length axis.
    """
    if isinstance(primitive, Sphere):
        r = jnp.asarray(primitive.radius)
        i = (2.0 / 5.0) * mass * r ** 2
        return jnp.diag(jnp.stack([i, i, i]))
    if isinstance(primitive, OrientedBox):
        ex, ey, ez = 2.0 * jnp.asarray(primitive.half_extents)
        factor = mass / 12.0
        return jnp.diag(jnp.stack([
            factor * (ey ** 2 + ez ** 2),
            factor * (ex ** 2 + ez ** 2),
            factor * (ex ** 2 + ey ** 2),
        ]))
    if isinstance(primitive, Cylinder):
        r = jnp.asarray(primitive.radius)
        length = 2.0 * jnp.asarray(primitive.half_length)
        i_axis = 0.5 * mass * r ** 2
        i_perp = (1.0 / 12.0) * mass * (3.0 * r ** 2 + length ** 2)
        return jnp.diag(jnp.stack([i_perp, i_perp, i_axis]))
    raise UnsupportedShapeKind(_shape_kind(primitive))


def local_frame(primitive: CollisionPrimitive) -> Array:
    """Rotation whose rows are the primitive's local axes in the parent frame.

    Spheres are isotropic and use the identity.
    """
    if isinstance(primitive, Sphere):
        return jnp.eye(3)
    if isinstance(primitive, OrientedBox):
        return primitive.basis
    if isinstance(primitive, Cylinder):
        return so3.frame_from_axis(jnp.asarray(primitive.axis))
    raise UnsupportedShapeKind(_shape_kind(primitive))
