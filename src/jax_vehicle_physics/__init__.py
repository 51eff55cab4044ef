"""
JAX Vehicle Physics: rigid-body properties of vehicle parts from collision geometry.

This library computes volumes, centers of mass and inertia tensors for the
joints of a vehicle skeleton from the sphere, oriented box and cylinder
collision volumes attached to them, and packages them as physics objects.
"""

import jax
jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"

# Import core modules
from . import transforms
from . import core
from . import io

from .aggregate import AggregationConvention, aggregate
from .builder import build_physics_object, generate_physics_object
from .config import DEFAULT_CONFIG, BuilderConfig, load_config
from .mass import volume_of

__all__ = [
    "transforms",
    "core",
    "io",
    "AggregationConvention",
    "BuilderConfig",
    "DEFAULT_CONFIG",
    "aggregate",
    "build_physics_object",
    "generate_physics_object",
    "load_config",
    "volume_of",
]
