"""Domain entities for feasibility checks."""

from .line import (
    Camera,
    CameraAttribute,
    Equipment,
    IoTDevice,
    Line,
    LineTree,
    Position,
    RelayOutput,
)
from .project import (
    AssignmentEdge,
    AuxCounts,
    DeviceInventory,
    Factory,
    FactoryGroup,
    FactoryTopology,
    HardwareRequirement,
    ProjectRecord,
)

__all__ = [
    "AssignmentEdge",
    "AuxCounts",
    "Camera",
    "CameraAttribute",
    "DeviceInventory",
    "Equipment",
    "Factory",
    "FactoryGroup",
    "FactoryTopology",
    "HardwareRequirement",
    "IoTDevice",
    "Line",
    "LineTree",
    "Position",
    "ProjectRecord",
    "RelayOutput",
]
