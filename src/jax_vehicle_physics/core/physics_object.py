"""Physics object PyTrees produced from a vehicle's collision geometry.

A physics object holds one record per selected skeleton joint with the
volume (used as mass at unit density), center of mass and packed symmetric
inertia tensor of the collision volumes attached to that joint.
"""

from typing import Tuple

import jax.numpy as jnp
from flax import struct
from jax import Array


@struct.dataclass
class JointMassProperties:
    """Aggregated rigid-body properties of the primitives on one joint.

    Attributes:
        total_mass: Sum of primitive volumes (unit density).
        center_of_mass: Array of shape (3,), mass-weighted anchor average.
        inertia: Array of shape (3, 3), symmetric tensor about center_of_mass.
    """
    total_mass: Array
    center_of_mass: Array
    inertia: Array

    @classmethod
    def zero(cls) -> "JointMassProperties":
        return cls(
            total_mass=jnp.zeros(()),
            center_of_mass=jnp.zeros(3),
            inertia=jnp.zeros((3, 3)),
        )


@struct.dataclass
class JointParameters:
    """Tunable joint parameters that do not depend on collision geometry."""
    stiffness: float = struct.field(pytree_node=False, default=0.0)
    min_angle: float = struct.field(pytree_node=False, default=0.0)
    max_angle: float = struct.field(pytree_node=False, default=0.0)
    dof: float = struct.field(pytree_node=False, default=0.0)


@struct.dataclass
class PhysicsJointRecord:
    """Physics data for one selected skeleton joint.

    Attributes:
        joint_index: Index of the joint in the skeleton.
        volume: Scalar volume of the joint's collision primitives.
        center_of_mass: Array of shape (3,).
        inertia: Array of shape (6,), packed (xx, xy, xz, yy, yz, zz).
        parameters: Tunable stiffness / angle range / degrees of freedom.
    """
    joint_index: int = struct.field(pytree_node=False)
    volume: Array
    center_of_mass: Array
    inertia: Array
    parameters: JointParameters = struct.field(pytree_node=False, default_factory=JointParameters)


@struct.dataclass
class PhysicsObjectResult:
    """Root of the generated physics description.

    Attributes:
        name: Name of the physics object, taken from the collision object.
        num_joints: Number of joints in the source skeleton.
        joints: Records for the selected joints, in skeleton order.
        volume: Total volume over all selected joints.
    """
    name: str = struct.field(pytree_node=False)
    num_joints: int = struct.field(pytree_node=False)
    joints: Tuple[PhysicsJointRecord, ...]
    volume: Array

    @property
    def joint_indices(self) -> Tuple[int, ...]:
        return tuple(record.joint_index for record in self.joints)
