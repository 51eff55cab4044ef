"""I/O utilities for vehicle description files.

This module provides functions for parsing the XML vehicle document into
JAX-native data structures and for merging generated physics objects back.
"""

from .physics_writer import (
    add_history,
    add_physics_object,
    physics_object_from_element,
    physics_object_to_element,
    replace_physics_object,
    write_vehicle,
)
from .vehicle_parser import (
    BV_SUFFIX,
    CompositeDrawable,
    VehicleDocument,
    load_vehicle,
    select_composite_drawable,
)

__all__ = [
    "BV_SUFFIX",
    "CompositeDrawable",
    "VehicleDocument",
    "add_history",
    "add_physics_object",
    "load_vehicle",
    "physics_object_from_element",
    "physics_object_to_element",
    "replace_physics_object",
    "select_composite_drawable",
    "write_vehicle",
]
