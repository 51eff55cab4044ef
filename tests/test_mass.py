"""Tests for single-primitive volumes and local inertia tensors."""

import jax.numpy as jnp
import numpy as np
import pytest

from jax_vehicle_physics.core import (
    Cylinder,
    MalformedPrimitiveError,
    OrientedBox,
    Sphere,
    UnsupportedShapeKind,
)
from jax_vehicle_physics.mass import check_arity, local_frame, local_inertia, volume_of

AXES = (jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, 1.0, 0.0]), jnp.array([0.0, 0.0, 1.0]))


def make_sphere(radius, anchor=(0.0, 0.0, 0.0)):
    return Sphere(joint_index=0, radius=jnp.asarray(radius), vectors=(jnp.array(anchor),))


def make_box(half_extents, anchor=(0.0, 0.0, 0.0), axes=AXES):
    return OrientedBox(joint_index=0, half_extents=jnp.array(half_extents),
                       vectors=(jnp.array(anchor),) + tuple(axes))


def make_cylinder(radius, half_length, anchor=(0.0, 0.0, 0.0), axis=(0.0, 0.0, 1.0)):
    return Cylinder(joint_index=0, radius=jnp.asarray(radius), half_length=jnp.asarray(half_length),
                    vectors=(jnp.array(anchor), jnp.array(axis)))


def test_sphere_volume():
    np.testing.assert_allclose(volume_of(make_sphere(2.0)), 4.0 / 3.0 * np.pi * 8.0)


def test_box_volume():
    np.testing.assert_allclose(volume_of(make_box([1.0, 2.0, 3.0])), 48.0)


def test_cylinder_volume():
    np.testing.assert_allclose(volume_of(make_cylinder(0.5, 2.0)), np.pi * 0.25 * 4.0)


def test_zero_size_volume():
    """Test degenerate sizes give zero volume rather than an error."""
    assert float(volume_of(make_sphere(0.0))) == 0.0
    assert float(volume_of(make_box([0.0, 1.0, 1.0]))) == 0.0


def test_unknown_shape_volume_raises():
    with pytest.raises(UnsupportedShapeKind, match="str"):
        volume_of("capsule")


def test_sphere_local_inertia():
    sphere = make_sphere(1.5)
    mass = volume_of(sphere)
    I = local_inertia(sphere, mass)
    expected = 0.4 * mass * 1.5 ** 2
    np.testing.assert_allclose(I, jnp.eye(3) * expected, rtol=1e-12)


def test_box_local_inertia():
    """Test box moments use full extents."""
    box = make_box([0.5, 1.0, 1.5])
    I = local_inertia(box, 12.0)
    # Full extents 1, 2, 3
    np.testing.assert_allclose(jnp.diag(I), jnp.array([4.0 + 9.0, 1.0 + 9.0, 1.0 + 4.0]), rtol=1e-12)
    np.testing.assert_allclose(I - jnp.diag(jnp.diag(I)), jnp.zeros((3, 3)))


def test_cylinder_local_inertia():
    """Test cylinder moments, length axis along local Z."""
    cylinder = make_cylinder(1.0, 1.5)
    I = local_inertia(cylinder, 12.0)
    i_perp = (12.0 / 12.0) * (3.0 * 1.0 + 3.0 ** 2)
    i_axis = 0.5 * 12.0 * 1.0
    np.testing.assert_allclose(jnp.diag(I), jnp.array([i_perp, i_perp, i_axis]), rtol=1e-12)


def test_local_frames():
    np.testing.assert_allclose(local_frame(make_sphere(1.0)), jnp.eye(3))

    tilted = (AXES[1], -AXES[0], AXES[2])
    np.testing.assert_allclose(local_frame(make_box([1.0, 1.0, 1.0], axes=tilted)),
                               jnp.stack(tilted))

    frame = local_frame(make_cylinder(1.0, 1.0, axis=(0.0, 2.0, 0.0)))
    np.testing.assert_allclose(frame[2], jnp.array([0.0, 1.0, 0.0]), atol=1e-12)


def test_check_arity_accepts_valid_primitives():
    check_arity(make_sphere(1.0))
    check_arity(make_box([1.0, 1.0, 1.0]))
    check_arity(make_cylinder(1.0, 1.0))


@pytest.mark.parametrize("primitive, expected, found", [
    (Sphere(joint_index=3, radius=jnp.asarray(1.0), vectors=()), 1, 0),
    (OrientedBox(joint_index=3, half_extents=jnp.ones(3), vectors=(jnp.zeros(3),) + AXES[:2]), 4, 3),
    (Cylinder(joint_index=3, radius=jnp.asarray(1.0), half_length=jnp.asarray(1.0),
              vectors=(jnp.zeros(3),)), 2, 1),
])
def test_check_arity_rejects_wrong_vector_count(primitive, expected, found):
    with pytest.raises(MalformedPrimitiveError) as excinfo:
        check_arity(primitive)
    assert excinfo.value.expected == expected
    assert excinfo.value.found == found
    assert excinfo.value.joint_index == 3


def test_check_arity_unknown_shape():
    with pytest.raises(UnsupportedShapeKind):
        check_arity(object())
