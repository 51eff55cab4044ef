#!/usr/bin/env python3
"""Generate vehicle physics objects from collision geometry: vehicle XML → vehicle XML."""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from jax_vehicle_physics import __version__
from jax_vehicle_physics.builder import generate_physics_object
from jax_vehicle_physics.config import DEFAULT_CONFIG, BuilderConfig, load_config
from jax_vehicle_physics.core import VehicleFileError, VehiclePhysicsError
from jax_vehicle_physics.io import (
    BV_SUFFIX,
    VehicleDocument,
    add_history,
    add_physics_object,
    load_vehicle,
    replace_physics_object,
    select_composite_drawable,
    write_vehicle,
)

logger = logging.getLogger(__name__)

VEHICLE_EXTENSION = ".xml"


@dataclass
class GenerateOptions:
    no_history: bool = False
    no_remove: bool = False
    config: BuilderConfig = DEFAULT_CONFIG


def _args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="jax-vehicle-physics",
        description="Generate physics objects for a vehicle from its collision volumes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  jax-vehicle-physics input/car.xml output/car.xml\n"
            "  jax-vehicle-physics --force --no_history input/car.xml\n"
        ),
    )
    p.add_argument("input_path", help="The input vehicle file.")
    p.add_argument("output_path", nargs="?", default=None,
                   help="The output vehicle file. Defaults to overwriting input_path.")
    p.add_argument("-f", "--force", action="store_true",
                   help="Force overwrite the output file.")
    p.add_argument("-nh", "--no_history", action="store_true",
                   help="Don't add a history entry.")
    p.add_argument("-nr", "--no_remove", action="store_true",
                   help="Rename existing physics objects instead of removing them.")
    p.add_argument("--skip-unknown-shapes", action="store_true",
                   help="Ignore collision shapes other than sphere, obb and cylinder.")
    p.add_argument("--config", default=None, help="JSON file overriding joint settings.")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def _confirm_overwrite(path: str) -> bool:
    while True:
        try:
            response = input(f'Output file "{path}" already exists. Do you want to overwrite? [Yes/No] ')
        except EOFError:
            raise VehiclePhysicsError("No answer to the overwrite prompt, pass -f to overwrite.") from None
        answer = response.strip().lower()
        if answer == "yes":
            return True
        if answer == "no":
            return False


def _choose_drawable(names: Sequence[str]) -> int:
    while True:
        print("Multiple composite drawables found. Please pick from the following list:")
        for i, name in enumerate(names):
            print(f"\t[{i}] {name}")
        try:
            response = input()
        except EOFError:
            raise VehiclePhysicsError("No composite drawable selected.") from None
        try:
            index = int(response)
        except ValueError:
            index = -1
        if 0 <= index < len(names):
            return index
        print(f"Invalid index specified. Please enter an index between 0 and {len(names) - 1}.")


def _check_paths(input_path: str, output_path: str) -> None:
    if not os.path.isfile(input_path):
        raise VehicleFileError(f"Could not find input path: {input_path}")
    for label, path in (("Input", input_path), ("Output", output_path)):
        if os.path.splitext(path)[1].lower() != VEHICLE_EXTENSION:
            raise VehicleFileError(f"{label} must be a {VEHICLE_EXTENSION} file.")

    directory = os.path.dirname(output_path) or os.getcwd()
    if not os.path.isdir(directory):
        raise VehicleFileError(f'Output directory "{directory}" doesn\'t exist.')
    if os.path.exists(output_path) and not os.access(output_path, os.W_OK):
        raise VehicleFileError(f'Output path "{output_path}" is read only.')


def generate(document: VehicleDocument, options: GenerateOptions, chooser=None) -> VehicleDocument:
    """Generate the primary and BV physics objects and merge them into ``document``.

    Everything is computed before the document is modified, so a failure
    leaves it untouched.
    """
    drawable = select_composite_drawable(document, chooser)
    skeleton_name = drawable.skeleton_name

    skeleton = document.skeleton(skeleton_name)
    if skeleton is None:
        raise VehicleFileError(f"Could not find skeleton with name: {skeleton_name}.")
    collision_object = document.collision_object(skeleton_name)
    if collision_object is None:
        raise VehicleFileError(f"Could not find collision object with name: {skeleton_name}.")

    skeleton_bv = document.skeleton(skeleton_name + BV_SUFFIX) or skeleton
    collision_object_bv = document.collision_object(skeleton_name + BV_SUFFIX)

    logger.info("Generating new physics object for %s", drawable.name)
    physics_object = generate_physics_object(skeleton, collision_object, config=options.config)

    physics_object_bv = None
    if collision_object_bv is None:
        logger.info("Not generating physics object BV due to no collision object BV")
    else:
        logger.info("Generating new physics object BV")
        physics_object_bv = generate_physics_object(
            skeleton_bv, collision_object_bv, restricted=True, config=options.config
        )

    replace_physics_object(document, drawable.name, keep_old=options.no_remove)
    replace_physics_object(document, drawable.name + BV_SUFFIX, keep_old=options.no_remove)

    if not options.no_history:
        add_history(document, f"Physics Objects Generated by jax_vehicle_physics v{__version__}.")
    add_physics_object(document, physics_object)
    if physics_object_bv is not None:
        add_physics_object(document, physics_object_bv)

    return document


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    input_path = os.path.abspath(args.input_path)
    output_path = os.path.abspath(args.output_path or args.input_path)

    try:
        _check_paths(input_path, output_path)
        if os.path.exists(output_path) and not args.force and not _confirm_overwrite(output_path):
            return 0

        logger.info("Input Path: %s", input_path)
        logger.info("Output Path: %s", output_path)
        logger.debug("Force: %s, No History: %s, No Remove: %s",
                     args.force, args.no_history, args.no_remove)

        options = GenerateOptions(
            no_history=args.no_history,
            no_remove=args.no_remove,
            config=load_config(args.config) if args.config else DEFAULT_CONFIG,
        )
        document = load_vehicle(input_path, skip_unknown_shapes=args.skip_unknown_shapes)
        generate(document, options, chooser=_choose_drawable)
        write_vehicle(document, output_path)
    except (VehiclePhysicsError, OSError) as e:
        logger.error("There was an error generating the physics object: %s", e)
        return 1

    logger.info("Saved updated vehicle file to: %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
