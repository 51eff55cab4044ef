"""Exception types raised while deriving vehicle physics data."""


class VehiclePhysicsError(ValueError):
    """Base class for all errors raised by jax_vehicle_physics."""


class MalformedPrimitiveError(VehiclePhysicsError):
    """A collision primitive carries the wrong number of position vectors.

    Spheres need 1 vector, oriented boxes 4 (anchor + 3 axes) and
    cylinders 2 (anchor + axis direction).
    """

    def __init__(self, kind: str, joint_index: int, expected: int, found: int):
        self.kind = kind
        self.joint_index = joint_index
        self.expected = expected
        self.found = found
        super().__init__(
            f"{kind} on joint {joint_index} has {found} position vectors, "
            f"expected {expected}"
        )


class UnsupportedShapeKind(VehiclePhysicsError):
    """A collision shape kind has no known volume or inertia formula."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported collision shape kind: {kind!r}")


class VehicleFileError(VehiclePhysicsError):
    """The vehicle document is missing data or contains invalid values."""
