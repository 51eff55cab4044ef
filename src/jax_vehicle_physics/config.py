"""Static configuration for physics object generation.

Joint selection lists and per-joint tunable parameters are plain data. The
defaults reproduce the vehicle conventions (doors, trunk, hood and four
wheels); a JSON file can override any of them.
"""

import json
import logging
from types import MappingProxyType
from typing import FrozenSet, Mapping

from flax import struct

from .aggregate import AggregationConvention
from .core import JointParameters, VehicleFileError

logger = logging.getLogger(__name__)

ROOT_JOINT_INDEX = 0

DOOR_PARAMETERS = JointParameters(stiffness=0.8, min_angle=0.0, max_angle=1.0, dof=1.0)
HOOD_PARAMETERS = JointParameters(stiffness=0.5, min_angle=0.0, max_angle=0.5, dof=1.0)


@struct.dataclass
class BuilderConfig:
    """Immutable settings for :func:`jax_vehicle_physics.builder.build_physics_object`.

    Attributes:
        joint_names: Joints selected in the full pass (besides the root).
        joint_names_bv: Joints selected in the restricted (BV) pass.
        joint_parameters: Tunable parameters keyed by exact joint name.
                          Unlisted joints get all-zero parameters.
        convention: How per-primitive inertia tensors are combined.
    """
    joint_names: FrozenSet[str] = struct.field(pytree_node=False)
    joint_names_bv: FrozenSet[str] = struct.field(pytree_node=False)
    joint_parameters: Mapping[str, JointParameters] = struct.field(pytree_node=False)
    convention: AggregationConvention = struct.field(
        pytree_node=False, default=AggregationConvention.PLAIN_SUM
    )

    def allowed_joints(self, restricted: bool) -> FrozenSet[str]:
        return self.joint_names_bv if restricted else self.joint_names

    def parameters_for(self, joint_name: str) -> JointParameters:
        return self.joint_parameters.get(joint_name, JointParameters())


DEFAULT_CONFIG = BuilderConfig(
    joint_names=frozenset({"DoorDRot", "DoorPRot", "TrunkRot", "HoodRot", "w0", "w1", "w2", "w3"}),
    joint_names_bv=frozenset({"w0", "w1", "w2", "w3"}),
    joint_parameters=MappingProxyType({
        "DoorDRot": DOOR_PARAMETERS,
        "DoorPRot": DOOR_PARAMETERS,
        "TrunkRot": DOOR_PARAMETERS,
        "HoodRot": HOOD_PARAMETERS,
    }),
)


def _joint_name_set(data: dict, key: str, default: frozenset) -> frozenset:
    if key not in data:
        return default
    names = data[key]
    if not isinstance(names, (list, tuple)) or not all(isinstance(n, str) for n in names):
        raise VehicleFileError(f"Invalid {key}: expected a list of joint names, got {names!r}")
    return frozenset(names)


def config_from_dict(data: dict, base: BuilderConfig = DEFAULT_CONFIG) -> BuilderConfig:
    """Build a BuilderConfig from a dict, falling back to ``base`` per key.

    Recognised keys: ``joint_names``, ``joint_names_bv`` (lists of names),
    ``joint_parameters`` (name -> {stiffness, min_angle, max_angle, dof})
    and ``convention`` ("plain_sum" or "mass_scaled").
    """
    unknown = set(data) - {"joint_names", "joint_names_bv", "joint_parameters", "convention"}
    if unknown:
        raise VehicleFileError(f"Unknown configuration keys: {sorted(unknown)}")

    joint_parameters = base.joint_parameters
    if "joint_parameters" in data:
        try:
            joint_parameters = MappingProxyType({
                name: JointParameters(**{k: float(v) for k, v in params.items()})
                for name, params in data["joint_parameters"].items()
            })
        except (TypeError, ValueError, AttributeError) as e:
            raise VehicleFileError(f"Invalid joint_parameters: {e}") from e

    convention = base.convention
    if "convention" in data:
        try:
            convention = AggregationConvention(data["convention"])
        except ValueError as e:
            raise VehicleFileError(f"Invalid convention: {data['convention']!r}") from e

    return BuilderConfig(
        joint_names=_joint_name_set(data, "joint_names", base.joint_names),
        joint_names_bv=_joint_name_set(data, "joint_names_bv", base.joint_names_bv),
        joint_parameters=joint_parameters,
        convention=convention,
    )


def load_config(config_path: str) -> BuilderConfig:
    """Load a JSON configuration file on top of :data:`DEFAULT_CONFIG`."""
    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise VehicleFileError(f"Could not parse config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise VehicleFileError(f"Config file {config_path} must contain a JSON object")

    logger.debug("Loaded configuration overrides %s from %s", sorted(data), config_path)
    return config_from_dict(data)
