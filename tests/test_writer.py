"""Tests for physics object serialization and document merging."""

import shutil
from pathlib import Path

import jax.numpy as jnp
import numpy as np
import pytest

from jax_vehicle_physics.builder import generate_physics_object
from jax_vehicle_physics.core import VehicleFileError
from jax_vehicle_physics.io import (
    add_history,
    add_physics_object,
    load_vehicle,
    physics_object_from_element,
    physics_object_to_element,
    replace_physics_object,
    write_vehicle,
)

FIXTURE = Path(__file__).parent / "fixtures" / "sample_car.xml"


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "car.xml"
    shutil.copy(FIXTURE, path)
    return load_vehicle(str(path))


@pytest.fixture
def result(document):
    return generate_physics_object(document.skeleton("car"), document.collision_object("car"))


def test_physics_object_element(result):
    elem = physics_object_to_element(result)

    assert elem.tag == "physicsObject"
    assert elem.get("name") == "car"
    assert elem.get("numJoints") == "10"
    joints = elem.findall("physicsJoint")
    assert [j.get("index") for j in joints] == ["0", "1", "2", "3", "4", "5", "6", "7", "8"]

    door = joints[1]
    assert float(door.get("stiffness")) == pytest.approx(0.8)
    assert float(door.get("maxAngle")) == pytest.approx(1.0)
    assert door.find("physicsVector").get("xyz") == "1 0.5 0"
    assert sorted(door.find("inertiaMatrix").attrib) == ["xx", "xy", "xz", "yy", "yz", "zz"]


def test_element_values_read_back(result):
    """Test the written element carries the computed numbers."""
    parsed = physics_object_from_element(physics_object_to_element(result))

    assert parsed.name == result.name
    assert parsed.joint_indices == result.joint_indices
    np.testing.assert_allclose(parsed.volume, result.volume, rtol=1e-8)
    for written, original in zip(parsed.joints, result.joints):
        np.testing.assert_allclose(written.volume, original.volume, rtol=1e-8)
        np.testing.assert_allclose(written.center_of_mass, original.center_of_mass, rtol=1e-8, atol=1e-12)
        np.testing.assert_allclose(written.inertia, original.inertia, rtol=1e-8, atol=1e-12)
        assert written.parameters == original.parameters


def test_malformed_physics_object_element(document):
    elem = document.find_physics_object("car")
    elem.find("physicsJoint").remove(elem.find("physicsJoint/physicsVector"))
    with pytest.raises(VehicleFileError, match="Malformed"):
        physics_object_from_element(elem)


@pytest.mark.parametrize("xyz", ["1 2", "1 2 3 4"])
def test_physics_vector_needs_three_components(document, xyz):
    elem = document.find_physics_object("car")
    elem.find("physicsJoint/physicsVector").set("xyz", xyz)
    with pytest.raises(VehicleFileError, match="needs 3 components"):
        physics_object_from_element(elem)


def test_replace_removes_existing(document):
    assert replace_physics_object(document, "car")
    assert document.find_physics_object("car") is None
    assert not replace_physics_object(document, "car")


def test_replace_keeps_old(document):
    assert replace_physics_object(document, "car", keep_old=True)
    assert document.find_physics_object("car") is None
    assert document.find_physics_object("car_old") is not None


def test_write_and_reload(document, result, tmp_path):
    replace_physics_object(document, "car")
    add_physics_object(document, result)
    add_history(document, "generated in test")

    out = tmp_path / "out.xml"
    write_vehicle(document, str(out))

    reloaded = load_vehicle(str(out))
    elem = reloaded.find_physics_object("car")
    assert elem is not None
    np.testing.assert_allclose(float(elem.get("volume")), result.volume, rtol=1e-8)
    assert reloaded.root.find("history/line").text == "generated in test"
    # Source data is left intact
    assert reloaded.skeleton("car").num_joints == 10


def test_write_defaults_to_source_path(document):
    add_history(document, "in place")
    path = write_vehicle(document)
    assert path == document.path
    assert "in place" in Path(path).read_text()


def test_zero_record_serialized(result):
    elem = physics_object_to_element(result)
    hood = elem.findall("physicsJoint")[3]
    assert float(hood.get("volume")) == 0.0
    assert hood.find("physicsVector").get("xyz") == "0 0 0"
    matrix = hood.find("inertiaMatrix")
    assert all(float(matrix.get(k)) == 0.0 for k in matrix.attrib)
    np.testing.assert_allclose(result.joints[3].inertia, jnp.zeros(6))
