"""Vehicle description parser.

This module reads the XML vehicle document (composite drawables, skeletons
and collision objects) and converts it into JAX-native data structures for
physics object generation.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

import jax.numpy as jnp
from lxml import etree

from jax_vehicle_physics.core import (
    CollisionObject,
    Cylinder,
    OrientedBox,
    Skeleton,
    Sphere,
    UnsupportedShapeKind,
    VehicleFileError,
)

logger = logging.getLogger(__name__)

BV_SUFFIX = "BV"
SHAPE_TAGS = ("sphere", "obb", "cylinder")


@dataclass(frozen=True)
class CompositeDrawable:
    """A drawable vehicle entry and the skeleton it is rigged to."""
    name: str
    skeleton_name: str


@dataclass
class VehicleDocument:
    """Parsed vehicle file.

    The lxml tree is kept so generated physics objects can be merged back
    into the original document.
    """
    path: str
    tree: etree._ElementTree
    composite_drawables: Tuple[CompositeDrawable, ...] = ()
    skeletons: Dict[str, Skeleton] = field(default_factory=dict)
    collision_objects: Dict[str, CollisionObject] = field(default_factory=dict)

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    def skeleton(self, name: str) -> Optional[Skeleton]:
        return self.skeletons.get(name)

    def collision_object(self, name: str) -> Optional[CollisionObject]:
        return self.collision_objects.get(name)

    def find_physics_object(self, name: str) -> Optional[etree._Element]:
        for element in self.root.findall('physicsObject'):
            if element.get('name') == name:
                return element
        return None


def load_vehicle(vehicle_path: str, skip_unknown_shapes: bool = False) -> VehicleDocument:
    """Load a vehicle XML file.

    Args:
        vehicle_path: Path to the vehicle document.
        skip_unknown_shapes: Skip collision shapes other than sphere / obb /
            cylinder with a warning instead of failing.

    Returns:
        VehicleDocument with skeletons and collision objects by name.

    Raises:
        VehicleFileError: malformed document or attribute values.
        UnsupportedShapeKind: unknown shape element, unless skipped.
    """
    parser = etree.XMLParser(remove_blank_text=True)
    try:
        tree = etree.parse(vehicle_path, parser)
    except etree.XMLSyntaxError as e:
        raise VehicleFileError(f"Could not parse vehicle file {vehicle_path}: {e}") from e

    root = tree.getroot()

    drawables = []
    for elem in root.findall('compositeDrawable'):
        name = _required(elem, 'name')
        drawables.append(CompositeDrawable(name=name, skeleton_name=elem.get('skeleton', name)))

    skeletons = {}
    for elem in root.findall('skeleton'):
        skeleton = _parse_skeleton(elem)
        skeletons[skeleton.name] = skeleton

    collision_objects = {}
    for elem in root.findall('collisionObject'):
        collision_object = _parse_collision_object(elem, skip_unknown_shapes)
        collision_objects[collision_object.name] = collision_object

    logger.debug(
        "Loaded %s: %d composite drawables, %d skeletons, %d collision objects",
        vehicle_path, len(drawables), len(skeletons), len(collision_objects),
    )

    return VehicleDocument(
        path=str(vehicle_path),
        tree=tree,
        composite_drawables=tuple(drawables),
        skeletons=skeletons,
        collision_objects=collision_objects,
    )


def select_composite_drawable(
    document: VehicleDocument,
    chooser: Optional[Callable[[Sequence[str]], int]] = None,
) -> CompositeDrawable:
    """Pick the composite drawable to process.

    Args:
        document: Loaded vehicle document.
        chooser: Called with the drawable names when there are several;
            returns the chosen index.

    Raises:
        VehicleFileError: no drawables, or several without a usable chooser.
    """
    drawables = document.composite_drawables
    if not drawables:
        raise VehicleFileError("Could not find any composite drawables in file.")
    if len(drawables) == 1:
        return drawables[0]
    if chooser is None:
        raise VehicleFileError(
            f"Multiple composite drawables found: {[d.name for d in drawables]}"
        )

    index = chooser([d.name for d in drawables])
    if not 0 <= index < len(drawables):
        raise VehicleFileError(f"Composite drawable index {index} out of range")
    return drawables[index]


def _parse_skeleton(elem) -> Skeleton:
    name = _required(elem, 'name')
    joint_names = [_required(joint, 'name') for joint in elem.findall('joint')]
    return Skeleton.from_names(name, joint_names)


def _parse_collision_object(elem, skip_unknown_shapes: bool) -> CollisionObject:
    name = _required(elem, 'name')
    primitives = []

    for volume in elem.iter('volume'):
        joint_index = _parse_int(volume, 'joint')
        for shape in volume:
            if not isinstance(shape.tag, str) or shape.tag == 'volume':
                continue  # comments, nested volumes
            if shape.tag not in SHAPE_TAGS:
                if skip_unknown_shapes:
                    logger.warning(
                        "Skipping unsupported collision shape <%s> on joint %d of %s",
                        shape.tag, joint_index, name,
                    )
                    continue
                raise UnsupportedShapeKind(shape.tag)
            primitives.append(_parse_shape(shape, joint_index))

    return CollisionObject(name=name, primitives=tuple(primitives))


def _parse_shape(shape, joint_index: int):
    vectors = tuple(_parse_vector(v, 'xyz') for v in shape.findall('vector'))

    if shape.tag == 'sphere':
        return Sphere(
            joint_index=joint_index,
            radius=jnp.asarray(_parse_float(shape, 'radius')),
            vectors=vectors,
        )
    elif shape.tag == 'obb':
        return OrientedBox(
            joint_index=joint_index,
            half_extents=_parse_vector(shape, 'halfExtents'),
            vectors=vectors,
        )
    else:
        return Cylinder(
            joint_index=joint_index,
            radius=jnp.asarray(_parse_float(shape, 'radius')),
            half_length=jnp.asarray(_parse_float(shape, 'halfLength')),
            vectors=vectors,
        )


def _required(elem, attr: str) -> str:
    value = elem.get(attr)
    if value is None:
        raise VehicleFileError(
            f"<{elem.tag}> on line {elem.sourceline} is missing attribute '{attr}'"
        )
    return value


def _parse_float(elem, attr: str) -> float:
    value = _required(elem, attr)
    try:
        return float(value)
    except ValueError as e:
        raise VehicleFileError(
            f"<{elem.tag}> on line {elem.sourceline}: '{attr}' is not a number: {value!r}"
        ) from e


def _parse_int(elem, attr: str) -> int:
    value = _required(elem, attr)
    try:
        return int(value)
    except ValueError as e:
        raise VehicleFileError(
            f"<{elem.tag}> on line {elem.sourceline}: '{attr}' is not an integer: {value!r}"
        ) from e


def _parse_vector(elem, attr: str):
    value = _required(elem, attr)
    try:
        xyz = [float(x) for x in value.split()]
    except ValueError as e:
        raise VehicleFileError(
            f"<{elem.tag}> on line {elem.sourceline}: '{attr}' is not a vector: {value!r}"
        ) from e
    if len(xyz) != 3:
        raise VehicleFileError(
            f"<{elem.tag}> on line {elem.sourceline}: '{attr}' needs 3 components, got {len(xyz)}"
        )
    return jnp.array(xyz)
