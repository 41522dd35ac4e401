"""
Result Value Objects

Immutable results produced by the checklist evaluator, the line walk and the
coverage chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import AssignmentKind, CoverageStatus


def completeness_percentage(passed: int, total: int) -> int:
    """
    Round ``100 * passed / total`` half-up to an integer percentage.

    ``total == 0`` is 0%: no applicable checks never counts as complete.
    Anything short of every check passing is capped at 99 so that 100% always
    means no gaps.
    """
    if total <= 0:
        return 0
    percentage = (200 * passed + total) // (2 * total)
    if passed < total:
        return min(percentage, 99)
    return percentage


@dataclass(frozen=True)
class ChecklistResult:
    """Pass/fail counts and gap labels for one entity or subtree."""

    passed: int = 0
    total: int = 0
    gaps: tuple[str, ...] = ()

    def __post_init__(self):
        if self.passed < 0 or self.total < 0:
            raise ValueError("Check counts cannot be negative")
        if self.passed > self.total:
            raise ValueError(
                f"Passed checks ({self.passed}) exceed total checks ({self.total})"
            )

    def merge(self, other: ChecklistResult) -> ChecklistResult:
        """Combine two results, keeping gap order."""
        return ChecklistResult(
            passed=self.passed + other.passed,
            total=self.total + other.total,
            gaps=self.gaps + other.gaps,
        )

    @property
    def percentage(self) -> int:
        return completeness_percentage(self.passed, self.total)

    @property
    def failed(self) -> int:
        return self.total - self.passed


@dataclass(frozen=True)
class LineGap:
    """Gap items grouped under one human-readable category."""

    category: str
    items: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "items": list(self.items)}


@dataclass(frozen=True)
class TopologyGap:
    """One missing piece of the factory topology and where it is missing."""

    area: str
    issue: str
    location: str = "Global"

    def to_dict(self) -> dict[str, Any]:
        return {"area": self.area, "issue": self.issue, "location": self.location}


@dataclass(frozen=True)
class LineCompletenessResult:
    """Completeness of one production line."""

    line_id: str
    percentage: int
    gaps: tuple[LineGap, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.percentage == 100

    @classmethod
    def unavailable(cls, line_id: str) -> LineCompletenessResult:
        """Terminal result for a line whose configuration could not be loaded."""
        return cls(
            line_id=line_id,
            percentage=0,
            gaps=(LineGap("Data", ("Unable to load line configuration",)),),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the gate UI."""
        return {
            "lineId": self.line_id,
            "isComplete": self.is_complete,
            "percentage": self.percentage,
            "gaps": [gap.to_dict() for gap in self.gaps],
        }


@dataclass(frozen=True)
class CoverageReport:
    """Outcome of one coverage stage."""

    kind: AssignmentKind
    status: CoverageStatus
    uncovered_ids: tuple[str, ...] = ()
    container_count: int = 0

    @classmethod
    def withheld(cls, kind: AssignmentKind) -> CoverageReport:
        return cls(kind=kind, status=CoverageStatus.WITHHELD)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status": self.status.value,
            "uncoveredIds": list(self.uncovered_ids),
            "containerCount": self.container_count,
        }


@dataclass(frozen=True)
class ServerNode:
    id: str
    name: str | None
    camera_ids: tuple[str, ...]


@dataclass(frozen=True)
class ReceiverNode:
    id: str
    name: str | None
    device_ids: tuple[str, ...]


@dataclass(frozen=True)
class GatewayNode:
    id: str
    name: str | None
    receivers: tuple[ReceiverNode, ...]


@dataclass(frozen=True)
class NetworkTopology:
    """Servers with their cameras and gateways with their receivers and devices."""

    servers: tuple[ServerNode, ...] = ()
    gateways: tuple[GatewayNode, ...] = ()


@dataclass(frozen=True)
class HardwareCoverageResult:
    """Result of the camera→server, device→receiver, receiver→gateway chain."""

    stages: tuple[CoverageReport, ...]
    topology: NetworkTopology = field(default_factory=NetworkTopology)

    @property
    def is_complete(self) -> bool:
        return bool(self.stages) and all(
            stage.status.is_covered for stage in self.stages
        )

    def stage(self, kind: AssignmentKind) -> CoverageReport:
        for report in self.stages:
            if report.kind == kind:
                return report
        raise KeyError(kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isComplete": self.is_complete,
            "stages": [stage.to_dict() for stage in self.stages],
        }
