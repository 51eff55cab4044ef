"""Aggregate mass properties of the collision primitives attached to a joint.

The aggregate tensor is the sum, over primitives, of each primitive's local
tensor rotated into the parent frame and moved to the joint's center of mass
with the parallel-axis theorem.
"""

import enum
from typing import Sequence

import jax.numpy as jnp

from .core import CollisionPrimitive, JointMassProperties
from .mass import check_arity, local_frame, local_inertia, volume_of
from .transforms import inertia as inertia_ops
from .transforms import so3


class AggregationConvention(str, enum.Enum):
    """How per-primitive tensors are combined into the joint tensor.

    PLAIN_SUM: sum of the translated per-primitive tensors.
    MASS_SCALED: that sum, multiplied again by the joint's total mass.
    """
    PLAIN_SUM = "plain_sum"
    MASS_SCALED = "mass_scaled"


def center_of_mass(primitives: Sequence[CollisionPrimitive]):
    """Mass-weighted average of primitive anchors.

    Returns:
        Tuple (center_of_mass (3,), total_mass). The center is the zero
        vector when the total mass is zero.
    """
    total_mass = jnp.zeros(())
    weighted_sum = jnp.zeros(3)
    for primitive in primitives:
        mass = volume_of(primitive)
        total_mass = total_mass + mass
        weighted_sum = weighted_sum + mass * jnp.asarray(primitive.anchor)

    com = jnp.where(total_mass > 0,
                    weighted_sum / jnp.where(total_mass > 0, total_mass, 1.0),
                    jnp.zeros(3))
    return com, total_mass


def aggregate(
    primitives: Sequence[CollisionPrimitive],
    convention: AggregationConvention = AggregationConvention.PLAIN_SUM,
) -> JointMassProperties:
    """Compute total mass, center of mass and inertia tensor for one joint.

    Args:
        primitives: Collision primitives attached to the joint.
        convention: Combination rule for the per-primitive tensors.

    Returns:
        JointMassProperties with the tensor taken about the center of mass.

    Raises:
        MalformedPrimitiveError: a primitive has the wrong vector count.
        UnsupportedShapeKind: a primitive is not one of the known shapes.
    """
    # Validate everything first so a bad primitive never yields partial data
    for primitive in primitives:
        check_arity(primitive)

    com, total_mass = center_of_mass(primitives)

    tensor = jnp.zeros((3, 3))
    for primitive in primitives:
        mass = volume_of(primitive)
        rotated = so3.rotate_tensor(local_inertia(primitive, mass), local_frame(primitive))
        offset = jnp.asarray(primitive.anchor) - com
        tensor = tensor + inertia_ops.translate(rotated, mass, offset)

    if convention == AggregationConvention.MASS_SCALED:
        tensor = tensor * total_mass

    # Mirror off-diagonals so the result is exactly symmetric
    tensor = 0.5 * (tensor + so3.transpose(tensor))

    return JointMassProperties(total_mass=total_mass, center_of_mass=com, inertia=tensor)
