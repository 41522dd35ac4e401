"""
Coverage Checker

Bipartite assignment coverage: every leaf must be linked to at least one
container. Run as a three-stage chain (camera→server, device→receiver,
receiver→gateway) that stops at the first incomplete stage.
"""

from collections.abc import Iterable, Sequence

from readiness_gate.core.observability import get_logger

from ...shared.exceptions import LoaderError
from ..entities.project import AssignmentEdge, HardwareRequirement
from ..repositories.data_loader import FeasibilityDataLoader
from ..value_objects.enums import AssignmentKind, CoverageStatus, HardwareKind
from ..value_objects.results import (
    CoverageReport,
    GatewayNode,
    HardwareCoverageResult,
    NetworkTopology,
    ReceiverNode,
    ServerNode,
)

logger = get_logger(__name__)

CHAIN_ORDER: tuple[AssignmentKind, ...] = (
    AssignmentKind.CAMERA_SERVER,
    AssignmentKind.DEVICE_RECEIVER,
    AssignmentKind.RECEIVER_GATEWAY,
)


def uncovered_leaves(
    leaf_ids: Iterable[str], edges: Iterable[AssignmentEdge]
) -> tuple[str, ...]:
    """Leaf ids without a matching edge, sorted for stable output."""
    covered = {edge.leaf_id for edge in edges}
    return tuple(sorted(set(leaf_ids) - covered))


def is_fully_covered(leaf_ids: Iterable[str], edges: Iterable[AssignmentEdge]) -> bool:
    """
    Check that every leaf appears in at least one edge.

    No leaves is vacuously covered. With leaves present an empty edge set is
    a failure, never a pass.
    """
    leaves = set(leaf_ids)
    edge_list = list(edges)
    if not leaves:
        return True
    if not edge_list:
        return False
    return not uncovered_leaves(leaves, edge_list)


def check_stage(
    kind: AssignmentKind,
    leaf_ids: Iterable[str],
    container_ids: Sequence[str],
    edges: Iterable[AssignmentEdge],
) -> CoverageReport:
    """Score one coverage stage against the containers that actually exist."""
    containers = set(container_ids)
    live_edges = [edge for edge in edges if edge.container_id in containers]
    leaves = set(leaf_ids)
    covered = is_fully_covered(leaves, live_edges)
    return CoverageReport(
        kind=kind,
        status=CoverageStatus.COVERED if covered else CoverageStatus.UNCOVERED,
        uncovered_ids=uncovered_leaves(leaves, live_edges),
        container_count=len(containers),
    )


def build_topology(
    requirements: Sequence[HardwareRequirement],
    edges: dict[AssignmentKind, list[AssignmentEdge]],
) -> NetworkTopology:
    """Servers with their cameras, gateways with their receivers and devices."""
    names = {req.id: req.name for req in requirements}

    def leaves_of(kind: AssignmentKind, container_id: str) -> tuple[str, ...]:
        return tuple(
            edge.leaf_id for edge in edges.get(kind, []) if edge.container_id == container_id
        )

    servers = tuple(
        ServerNode(
            id=req.id,
            name=req.name,
            camera_ids=leaves_of(AssignmentKind.CAMERA_SERVER, req.id),
        )
        for req in requirements
        if req.kind == HardwareKind.SERVER
    )
    gateways = tuple(
        GatewayNode(
            id=req.id,
            name=req.name,
            receivers=tuple(
                ReceiverNode(
                    id=receiver_id,
                    name=names.get(receiver_id),
                    device_ids=leaves_of(AssignmentKind.DEVICE_RECEIVER, receiver_id),
                )
                for receiver_id in leaves_of(AssignmentKind.RECEIVER_GATEWAY, req.id)
            ),
        )
        for req in requirements
        if req.kind == HardwareKind.GATEWAY
    )
    return NetworkTopology(servers=servers, gateways=gateways)


class HardwareCoverageChain:
    """
    Evaluates the three coverage stages in order.

    Once a stage is incomplete the remaining stages are withheld: downstream
    coverage means nothing without upstream coverage. A load failure marks
    the stage uncovered and withholds the rest.
    """

    def __init__(self, loader: FeasibilityDataLoader):
        self._loader = loader

    async def evaluate(self, project_id: str) -> HardwareCoverageResult:
        try:
            requirements = await self._loader.load_hardware_requirements(project_id)
            inventory = await self._loader.load_device_inventory(project_id)
        except LoaderError as e:
            logger.warning(
                "hardware_inventory_load_failed", project_id=project_id, error=e.message
            )
            return HardwareCoverageResult(
                stages=(
                    CoverageReport(
                        kind=CHAIN_ORDER[0], status=CoverageStatus.UNCOVERED
                    ),
                    *(CoverageReport.withheld(kind) for kind in CHAIN_ORDER[1:]),
                )
            )

        containers = {
            kind: [req.id for req in requirements if req.kind == kind.container_kind]
            for kind in CHAIN_ORDER
        }
        receiver_ids = containers[AssignmentKind.DEVICE_RECEIVER]
        leaves = {
            AssignmentKind.CAMERA_SERVER: inventory.camera_ids,
            AssignmentKind.DEVICE_RECEIVER: inventory.iot_device_ids,
            AssignmentKind.RECEIVER_GATEWAY: frozenset(receiver_ids),
        }

        stages: list[CoverageReport] = []
        loaded_edges: dict[AssignmentKind, list[AssignmentEdge]] = {}
        for index, kind in enumerate(CHAIN_ORDER):
            report, edges = await self._evaluate_stage(
                project_id, kind, leaves[kind], containers[kind]
            )
            stages.append(report)
            loaded_edges[kind] = edges
            if not report.status.is_covered:
                stages.extend(
                    CoverageReport.withheld(later) for later in CHAIN_ORDER[index + 1 :]
                )
                logger.info(
                    "coverage_chain_stopped",
                    project_id=project_id,
                    stage=kind.value,
                    uncovered=len(report.uncovered_ids),
                )
                break

        return HardwareCoverageResult(
            stages=tuple(stages),
            topology=build_topology(requirements, loaded_edges),
        )

    async def _evaluate_stage(
        self,
        project_id: str,
        kind: AssignmentKind,
        leaf_ids: Iterable[str],
        container_ids: Sequence[str],
    ) -> tuple[CoverageReport, list[AssignmentEdge]]:
        edges: list[AssignmentEdge] = []
        if container_ids:
            try:
                edges = await self._loader.load_assignment_edges(kind, container_ids)
            except LoaderError as e:
                logger.warning(
                    "assignment_edges_load_failed",
                    project_id=project_id,
                    stage=kind.value,
                    error=e.message,
                )
                return (
                    CoverageReport(
                        kind=kind,
                        status=CoverageStatus.UNCOVERED,
                        uncovered_ids=tuple(sorted(set(leaf_ids))),
                        container_count=len(container_ids),
                    ),
                    [],
                )
        return check_stage(kind, leaf_ids, container_ids, edges), edges
