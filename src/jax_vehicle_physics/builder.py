"""Physics object generation: per-joint mass properties for a vehicle.

This module walks a skeleton, selects the joints that get physics records
(the root plus the configured door / trunk / hood / wheel joints) and
aggregates the collision primitives attached to each of them.
"""

from collections import defaultdict
from typing import Dict, Iterable, Mapping, Sequence, Tuple

import jax.numpy as jnp

from .aggregate import aggregate
from .config import DEFAULT_CONFIG, ROOT_JOINT_INDEX, BuilderConfig
from .core import (
    CollisionObject,
    CollisionPrimitive,
    JointMassProperties,
    PhysicsJointRecord,
    PhysicsObjectResult,
    Skeleton,
)
from .transforms import inertia as inertia_ops


def group_primitives_by_joint(
    primitives: Iterable[CollisionPrimitive],
) -> Dict[int, Tuple[CollisionPrimitive, ...]]:
    """Group primitives by the index of the joint they move with.

    Order within each group follows the input order.
    """
    groups = defaultdict(list)
    for primitive in primitives:
        groups[primitive.joint_index].append(primitive)
    return {index: tuple(group) for index, group in groups.items()}


def select_joints(skeleton: Skeleton, restricted: bool = False,
                  config: BuilderConfig = DEFAULT_CONFIG):
    """Joints that receive a physics record, in skeleton order.

    The root joint is always selected. Other joints are selected by name
    from the full list, or from the wheels-only list when ``restricted``.
    """
    allowed = config.allowed_joints(restricted)
    return tuple(
        joint for joint in skeleton.joints
        if joint.index == ROOT_JOINT_INDEX or joint.name in allowed
    )


def build_joint_record(joint, primitives: Sequence[CollisionPrimitive],
                       config: BuilderConfig = DEFAULT_CONFIG) -> PhysicsJointRecord:
    """Physics record for a single joint.

    A joint without primitives gets zero volume, center of mass and inertia.
    """
    if primitives:
        props = aggregate(primitives, config.convention)
    else:
        props = JointMassProperties.zero()

    return PhysicsJointRecord(
        joint_index=joint.index,
        volume=props.total_mass,
        center_of_mass=props.center_of_mass,
        inertia=inertia_ops.to_symmetric6(props.inertia),
        parameters=config.parameters_for(joint.name),
    )


def build_physics_object(
    name: str,
    skeleton: Skeleton,
    primitives_by_joint: Mapping[int, Sequence[CollisionPrimitive]],
    restricted: bool = False,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> PhysicsObjectResult:
    """Build the physics object for a skeleton.

    Args:
        name: Name of the resulting physics object.
        skeleton: Ordered joints of the vehicle.
        primitives_by_joint: Collision primitives keyed by joint index.
        restricted: Use the wheels-only joint list (BV pass).
        config: Selection lists, joint parameters and aggregation convention.

    Returns:
        PhysicsObjectResult with one record per selected joint.

    Raises:
        MalformedPrimitiveError, UnsupportedShapeKind: from the aggregation.
        No partial result is returned when a joint fails.
    """
    records = []
    total_volume = jnp.zeros(())
    for joint in select_joints(skeleton, restricted, config):
        record = build_joint_record(joint, primitives_by_joint.get(joint.index, ()), config)
        records.append(record)
        total_volume = total_volume + record.volume

    return PhysicsObjectResult(
        name=name,
        num_joints=skeleton.num_joints,
        joints=tuple(records),
        volume=total_volume,
    )


def generate_physics_object(
    skeleton: Skeleton,
    collision_object: CollisionObject,
    restricted: bool = False,
    config: BuilderConfig = DEFAULT_CONFIG,
) -> PhysicsObjectResult:
    """Build a physics object named after ``collision_object``."""
    return build_physics_object(
        collision_object.name,
        skeleton,
        group_primitives_by_joint(collision_object.primitives),
        restricted=restricted,
        config=config,
    )
