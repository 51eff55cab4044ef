"""Serialize physics objects into the vehicle XML document."""

import logging
from typing import Optional

import jax.numpy as jnp
from lxml import etree

from jax_vehicle_physics.core import (
    JointParameters,
    PhysicsJointRecord,
    PhysicsObjectResult,
    VehicleFileError,
)

from .vehicle_parser import VehicleDocument, _parse_vector

logger = logging.getLogger(__name__)

PHYSICS_OBJECT_VERSION = 1
INERTIA_KEYS = ("xx", "xy", "xz", "yy", "yz", "zz")
OLD_SUFFIX = "_old"


def _fmt(value) -> str:
    return format(float(value), ".9g")


def physics_object_to_element(result: PhysicsObjectResult) -> etree._Element:
    """Convert a PhysicsObjectResult into a ``<physicsObject>`` element."""
    elem = etree.Element('physicsObject', {
        'name': result.name,
        'version': str(PHYSICS_OBJECT_VERSION),
        'materialName': '',
        'numJoints': str(result.num_joints),
        'volume': _fmt(result.volume),
    })

    for record in result.joints:
        params = record.parameters
        joint_elem = etree.SubElement(elem, 'physicsJoint', {
            'index': str(record.joint_index),
            'volume': _fmt(record.volume),
            'stiffness': _fmt(params.stiffness),
            'minAngle': _fmt(params.min_angle),
            'maxAngle': _fmt(params.max_angle),
            'dof': _fmt(params.dof),
        })
        etree.SubElement(joint_elem, 'physicsVector', {
            'xyz': ' '.join(_fmt(c) for c in record.center_of_mass),
        })
        etree.SubElement(joint_elem, 'inertiaMatrix', {
            key: _fmt(value) for key, value in zip(INERTIA_KEYS, record.inertia)
        })

    return elem


def physics_object_from_element(elem: etree._Element) -> PhysicsObjectResult:
    """Read a ``<physicsObject>`` element back into a PhysicsObjectResult."""
    try:
        records = []
        for joint_elem in elem.findall('physicsJoint'):
            vector = joint_elem.find('physicsVector')
            matrix = joint_elem.find('inertiaMatrix')
            records.append(PhysicsJointRecord(
                joint_index=int(joint_elem.get('index')),
                volume=jnp.asarray(float(joint_elem.get('volume'))),
                center_of_mass=_parse_vector(vector, 'xyz'),
                inertia=jnp.array([float(matrix.get(key)) for key in INERTIA_KEYS]),
                parameters=JointParameters(
                    stiffness=float(joint_elem.get('stiffness', 0.0)),
                    min_angle=float(joint_elem.get('minAngle', 0.0)),
                    max_angle=float(joint_elem.get('maxAngle', 0.0)),
                    dof=float(joint_elem.get('dof', 0.0)),
                ),
            ))

        return PhysicsObjectResult(
            name=elem.get('name'),
            num_joints=int(elem.get('numJoints')),
            joints=tuple(records),
            volume=jnp.asarray(float(elem.get('volume'))),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise VehicleFileError(
            f"Malformed <physicsObject> on line {elem.sourceline}: {e}"
        ) from e


def replace_physics_object(document: VehicleDocument, name: str, keep_old: bool = False) -> bool:
    """Remove, or rename with an ``_old`` suffix, an existing physics object.

    Returns:
        True if a physics object named ``name`` was found.
    """
    existing = document.find_physics_object(name)
    if existing is None:
        return False

    if keep_old:
        logger.info("Renaming existing physics object %s", name)
        existing.set('name', name + OLD_SUFFIX)
    else:
        logger.info("Deleting existing physics object %s", name)
        existing.getparent().remove(existing)
    return True


def add_physics_object(document: VehicleDocument, result: PhysicsObjectResult) -> etree._Element:
    elem = physics_object_to_element(result)
    document.root.append(elem)
    return elem


def add_history(document: VehicleDocument, line: str) -> None:
    """Append a ``<history>`` entry recording how the file was modified."""
    history = etree.SubElement(document.root, 'history')
    etree.SubElement(history, 'line').text = line


def write_vehicle(document: VehicleDocument, output_path: Optional[str] = None) -> str:
    """Write the document to ``output_path`` (default: its source path)."""
    path = str(output_path or document.path)
    document.tree.write(path, pretty_print=True, xml_declaration=True, encoding='utf-8')
    logger.debug("Wrote vehicle document to %s", path)
    return path
