from .enums import (
    AssignmentKind,
    CoverageStatus,
    HardwareKind,
    SolutionType,
    TriState,
)
from .results import (
    ChecklistResult,
    CoverageReport,
    GatewayNode,
    HardwareCoverageResult,
    LineCompletenessResult,
    LineGap,
    NetworkTopology,
    ReceiverNode,
    ServerNode,
    TopologyGap,
    completeness_percentage,
)

__all__ = [
    "AssignmentKind",
    "ChecklistResult",
    "CoverageReport",
    "CoverageStatus",
    "GatewayNode",
    "HardwareCoverageResult",
    "HardwareKind",
    "LineCompletenessResult",
    "LineGap",
    "NetworkTopology",
    "ReceiverNode",
    "ServerNode",
    "SolutionType",
    "TopologyGap",
    "TriState",
    "completeness_percentage",
]
