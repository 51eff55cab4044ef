"""Rotation matrices for building test frames."""

import jax.numpy as jnp

from jax_vehicle_physics.transforms import so3


def axis_angle(log_r):
    """Rodrigues' formula: rotation matrix for an axis-angle vector."""
    angle = jnp.linalg.norm(log_r)
    K = so3.skew_symmetric(log_r / jnp.where(angle > 1e-12, angle, 1.0))
    return jnp.eye(3) + jnp.sin(angle) * K + (1.0 - jnp.cos(angle)) * (K @ K)
