"""Skeleton and collision geometry PyTrees for vehicle physics.

This module defines the immutable input data structures: the articulated
skeleton of a vehicle and the primitive collision volumes attached to its
joints. Collision primitives form a closed union of three shape kinds.
"""

from typing import ClassVar, Tuple, Union

import jax.numpy as jnp
from flax import struct
from jax import Array


@struct.dataclass
class Joint:
    """A named node of the vehicle skeleton.

    Attributes:
        name: Joint name, used to look up selection and tunable parameters.
        index: Position of the joint in the skeleton, 0-based. Collision
               primitives and output records refer to joints by this index.
    """
    name: str = struct.field(pytree_node=False)
    index: int = struct.field(pytree_node=False)


@struct.dataclass
class Skeleton:
    """Ordered joint list of a vehicle. Joint 0 is the root."""
    name: str = struct.field(pytree_node=False)
    joints: Tuple[Joint, ...] = struct.field(pytree_node=False)

    @property
    def num_joints(self) -> int:
        return len(self.joints)

    @classmethod
    def from_names(cls, name: str, joint_names) -> "Skeleton":
        return cls(
            name=name,
            joints=tuple(Joint(name=n, index=i) for i, n in enumerate(joint_names)),
        )


@struct.dataclass
class Sphere:
    """Solid sphere collision volume.

    Attributes:
        joint_index: Index of the joint the sphere moves with.
        radius: Scalar radius.
        vectors: Companion position vectors, (anchor,).
    """
    expected_vectors: ClassVar[int] = 1

    joint_index: int = struct.field(pytree_node=False)
    radius: Array
    vectors: Tuple[Array, ...]

    @property
    def anchor(self) -> Array:
        return self.vectors[0]


@struct.dataclass
class OrientedBox:
    """Oriented bounding box collision volume.

    Attributes:
        joint_index: Index of the joint the box moves with.
        half_extents: Array of shape (3,) with half sizes along local X/Y/Z.
        vectors: Companion position vectors, (anchor, x_axis, y_axis, z_axis)
                 with the axes expressed in the parent frame.
    """
    expected_vectors: ClassVar[int] = 4

    joint_index: int = struct.field(pytree_node=False)
    half_extents: Array
    vectors: Tuple[Array, ...]

    @property
    def anchor(self) -> Array:
        return self.vectors[0]

    @property
    def basis(self) -> Array:
        """(3, 3) matrix whose rows are the local axes in the parent frame."""
        return jnp.stack(self.vectors[1:4], axis=0)


@struct.dataclass
class Cylinder:
    """Solid cylinder collision volume.

    Attributes:
        joint_index: Index of the joint the cylinder moves with.
        radius: Scalar radius.
        half_length: Half of the cylinder length along its axis.
        vectors: Companion position vectors, (anchor, axis_direction).
    """
    expected_vectors: ClassVar[int] = 2

    joint_index: int = struct.field(pytree_node=False)
    radius: Array
    half_length: Array
    vectors: Tuple[Array, ...]

    @property
    def anchor(self) -> Array:
        return self.vectors[0]

    @property
    def axis(self) -> Array:
        return self.vectors[1]


CollisionPrimitive = Union[Sphere, OrientedBox, Cylinder]


@struct.dataclass
class CollisionObject:
    """Named group of collision primitives belonging to one skeleton."""
    name: str = struct.field(pytree_node=False)
    primitives: Tuple[CollisionPrimitive, ...]
