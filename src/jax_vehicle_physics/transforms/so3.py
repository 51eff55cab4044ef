"""SO(3) rotation helpers in JAX.

This module implements the fixed-size 3x3 linear algebra used to bring
local inertia tensors of collision primitives into their parent frame.
All functions are pure, JIT-able, and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def transpose(M: Array) -> Array:
    """
    Transpose of (batched) matrices.

    For rotation matrices this is also the inverse.

    Args:
        M: (..., N, M) matrix

    Returns:
        (..., M, N) transposed matrix
    """
    return jnp.swapaxes(M, -1, -2)


def multiply(A: Array, B: Array) -> Array:
    """
    Matrix product of two (batched) matrices.

    Args:
        A: (..., N, K) left operand
        B: (..., K, M) right operand

    Returns:
        (..., N, M) result of A @ B
    """
    return jnp.matmul(A, B)


def skew_symmetric(v: Array) -> Array:
    """
    Convert 3D vector to skew-symmetric matrix.

    Args:
        v: (..., 3) vector

    Returns:
        (..., 3, 3) skew-symmetric matrix
    """
    zeros = jnp.zeros(v.shape[:-1], dtype=v.dtype)

    return jnp.stack([
        jnp.stack([zeros, -v[..., 2], v[..., 1]], axis=-1),
        jnp.stack([v[..., 2], zeros, -v[..., 0]], axis=-1),
        jnp.stack([-v[..., 1], v[..., 0], zeros], axis=-1)
    ], axis=-2)


def rotate_tensor(tensor: Array, R: Array) -> Array:
    """
    Express a second-order tensor given in local axes in the parent frame.

    The rows of ``R`` are the local X/Y/Z axes expressed in the parent
    frame, so the parent-frame tensor is ``Rᵀ · tensor · R``.

    Args:
        tensor: (..., 3, 3) tensor in local axes
        R: (..., 3, 3) matrix whose rows are the local basis vectors

    Returns:
        (..., 3, 3) tensor in the parent frame
    """
    return multiply(multiply(transpose(R), tensor), R)


def frame_from_axis(axis: Array) -> Array:
    """
    Build an orthonormal frame whose third row is the given axis direction.

    The first two rows are an arbitrary right-handed completion, which is
    enough for tensors that are symmetric about the axis. A zero axis is
    treated as local Z.

    Args:
        axis: (3,) direction vector, not necessarily normalized

    Returns:
        (3, 3) matrix with rows (u, v, axis / |axis|)
    """
    norm = jnp.linalg.norm(axis)
    z = jnp.where(norm > 1e-12, axis / jnp.where(norm > 1e-12, norm, 1.0),
                  jnp.array([0.0, 0.0, 1.0], dtype=axis.dtype))

    # Pick the helper least aligned with the axis
    helper = jnp.where(jnp.abs(z[2]) < 0.9,
                       jnp.array([0.0, 0.0, 1.0], dtype=z.dtype),
                       jnp.array([1.0, 0.0, 0.0], dtype=z.dtype))
    u = jnp.cross(helper, z)
    u = u / jnp.linalg.norm(u)
    v = jnp.cross(z, u)

    return jnp.stack([u, v, z], axis=0)
