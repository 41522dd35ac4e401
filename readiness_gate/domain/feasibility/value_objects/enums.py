"""Domain enums for feasibility checks."""

from enum import Enum


class TriState(str, Enum):
    """
    Three-valued governing flag.

    UNSET is always a gap. NO confirms the flag without unlocking dependent
    checks; YES confirms it and unlocks them.
    """

    UNSET = "unset"
    NO = "no"
    YES = "yes"

    @classmethod
    def from_value(cls, value: "TriState | bool | None") -> "TriState":
        """Coerce a nullable boolean row value into a tri-state."""
        if isinstance(value, TriState):
            return value
        if value is None:
            return cls.UNSET
        if isinstance(value, bool):
            return cls.YES if value else cls.NO
        raise ValueError(f"Cannot interpret {value!r} as a tri-state flag")

    @property
    def is_resolved(self) -> bool:
        """Check if the flag has been answered either way."""
        return self != TriState.UNSET


class SolutionType(str, Enum):
    """Per-line classification that selects the device-presence rule."""

    VISION = "vision"
    IOT = "iot"
    BOTH = "both"

    @classmethod
    def from_value(cls, value: "SolutionType | str | None") -> "SolutionType":
        """Unknown or absent values fall back to BOTH."""
        if isinstance(value, SolutionType):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.BOTH


class HardwareKind(str, Enum):
    """Top-level hardware units a project can require."""

    SERVER = "server"
    RECEIVER = "receiver"
    GATEWAY = "gateway"


class AssignmentKind(str, Enum):
    """Coverage relations between leaves and containers."""

    CAMERA_SERVER = "camera-server"
    DEVICE_RECEIVER = "device-receiver"
    RECEIVER_GATEWAY = "receiver-gateway"

    @property
    def container_kind(self) -> HardwareKind:
        """Hardware kind the leaves are assigned to."""
        return {
            AssignmentKind.CAMERA_SERVER: HardwareKind.SERVER,
            AssignmentKind.DEVICE_RECEIVER: HardwareKind.RECEIVER,
            AssignmentKind.RECEIVER_GATEWAY: HardwareKind.GATEWAY,
        }[self]


class CoverageStatus(str, Enum):
    """Outcome of one coverage stage."""

    COVERED = "covered"
    UNCOVERED = "uncovered"
    WITHHELD = "withheld"  # Not evaluated because an upstream stage failed

    @property
    def is_covered(self) -> bool:
        return self == CoverageStatus.COVERED
