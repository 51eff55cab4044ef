"""Symmetric inertia tensor helpers in JAX.

Inertia tensors are stored as full (3, 3) arrays during computation and
packed into 6 independent components ``(xx, xy, xz, yy, yz, zz)`` for
output records.
"""

import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def to_symmetric6(tensor: Array) -> Array:
    """
    Pack a symmetric 3x3 tensor into its 6 independent components.

    Off-diagonal components are averaged with their mirror so the packed
    form is symmetric even if round-off left the input slightly skewed.

    Args:
        tensor: (..., 3, 3) symmetric tensor

    Returns:
        (..., 6) array ordered (xx, xy, xz, yy, yz, zz)
    """
    sym = 0.5 * (tensor + so3.transpose(tensor))
    return jnp.stack([
        sym[..., 0, 0], sym[..., 0, 1], sym[..., 0, 2],
        sym[..., 1, 1], sym[..., 1, 2],
        sym[..., 2, 2],
    ], axis=-1)


def from_symmetric6(packed: Array) -> Array:
    """
    Unpack 6 components (xx, xy, xz, yy, yz, zz) into a symmetric 3x3 tensor.

    Args:
        packed: (..., 6) packed tensor

    Returns:
        (..., 3, 3) symmetric tensor
    """
    xx, xy, xz, yy, yz, zz = jnp.moveaxis(packed, -1, 0)
    return jnp.stack([
        jnp.stack([xx, xy, xz], axis=-1),
        jnp.stack([xy, yy, yz], axis=-1),
        jnp.stack([xz, yz, zz], axis=-1),
    ], axis=-2)


def steiner_term(mass: Array, offset: Array) -> Array:
    """
    Parallel-axis correction ``m (|d|² E - d ⊗ d)``.

    Uses the identity ``K(d)² = d ⊗ d - |d|² E`` for the skew matrix K.

    Args:
        mass: scalar mass
        offset: (..., 3) offset d between the two reference points

    Returns:
        (..., 3, 3) correction tensor
    """
    K = so3.skew_symmetric(offset)
    return -mass * so3.multiply(K, K)


def translate(inertia: Array, mass: Array, offset: Array) -> Array:
    """
    Move a tensor taken about a body's own centroid to a point at ``offset``.

    Huygens-Steiner theorem: ``I' = I + m (|d|² E - d ⊗ d)``.

    Args:
        inertia: (..., 3, 3) tensor about the body centroid
        mass: scalar mass of the body
        offset: (..., 3) vector between the centroid and the new reference
            point (the sign does not matter)

    Returns:
        (..., 3, 3) tensor about the new reference point
    """
    return inertia + steiner_term(mass, offset)


def untranslate(inertia: Array, mass: Array, offset: Array) -> Array:
    """
    Inverse of :func:`translate`: bring a tensor back to the body centroid.

    Args:
        inertia: (..., 3, 3) tensor about a point at ``offset`` from the centroid
        mass: scalar mass of the body
        offset: (..., 3) offset used for the forward translation

    Returns:
        (..., 3, 3) tensor about the centroid
    """
    return inertia - steiner_term(mass, offset)
