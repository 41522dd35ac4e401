"""
In-memory feasibility loader.

Serves snapshots from plain dictionaries. Used by tests and by callers that
already hold the rows in memory (e.g. a nightly export job).
"""

from collections import defaultdict
from collections.abc import Sequence

from readiness_gate.domain.feasibility.entities.line import Line, LineTree
from readiness_gate.domain.feasibility.entities.project import (
    AssignmentEdge,
    AuxCounts,
    DeviceInventory,
    FactoryTopology,
    HardwareRequirement,
    ProjectRecord,
)
from readiness_gate.domain.feasibility.repositories.data_loader import (
    FeasibilityDataLoader,
)
from readiness_gate.domain.feasibility.value_objects.enums import (
    AssignmentKind,
    SolutionType,
)
from readiness_gate.domain.shared.exceptions import LoaderError


class InMemoryFeasibilityLoader(FeasibilityDataLoader):
    """Loader backed by dictionaries, with optional failure injection."""

    def __init__(self) -> None:
        self.projects: dict[str, ProjectRecord] = {}
        self.project_lines: dict[str, list[Line]] = defaultdict(list)
        self.line_trees: dict[str, LineTree] = {}
        self.solution_types: dict[str, dict[str, SolutionType]] = defaultdict(dict)
        self.hardware: dict[str, list[HardwareRequirement]] = defaultdict(list)
        self.edges: dict[AssignmentKind, list[AssignmentEdge]] = defaultdict(list)
        self.aux_counts: dict[str, AuxCounts] = {}
        self.topologies: dict[str, FactoryTopology] = {}
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str | None], Exception] = {}

    # Setup helpers

    def add_line(self, project_id: str, line: Line, tree: LineTree | None = None) -> None:
        self.project_lines[project_id].append(line)
        if tree is not None:
            self.line_trees[line.id] = tree

    def assign(self, kind: AssignmentKind, leaf_id: str, container_id: str) -> None:
        self.edges[kind].append(AssignmentEdge(leaf_id=leaf_id, container_id=container_id))

    def fail(self, operation: str, error: Exception, key: str | None = None) -> None:
        """Make ``operation`` raise ``error`` (for one key, or for every key)."""
        self._failures[(operation, key)] = error

    def _check(self, operation: str, key: str) -> None:
        self.calls.append((operation, key))
        error = self._failures.get((operation, key)) or self._failures.get(
            (operation, None)
        )
        if error is not None:
            raise error

    # FeasibilityDataLoader

    async def load_line_tree(self, line_id: str) -> LineTree | None:
        self._check("load_line_tree", line_id)
        return self.line_trees.get(line_id)

    async def load_project_lines(self, project_id: str) -> list[Line]:
        self._check("load_project_lines", project_id)
        return list(self.project_lines.get(project_id, []))

    async def load_solution_type_map(self, project_id: str) -> dict[str, SolutionType]:
        self._check("load_solution_type_map", project_id)
        return dict(self.solution_types.get(project_id, {}))

    async def load_hardware_requirements(
        self, project_id: str
    ) -> list[HardwareRequirement]:
        self._check("load_hardware_requirements", project_id)
        return list(self.hardware.get(project_id, []))

    async def load_device_inventory(self, project_id: str) -> DeviceInventory:
        self._check("load_device_inventory", project_id)
        camera_ids: set[str] = set()
        device_ids: set[str] = set()
        for line in self.project_lines.get(project_id, []):
            tree = self.line_trees.get(line.id)
            if tree is None:
                continue
            camera_ids.update(cam.id for cam in tree.iter_cameras())
            device_ids.update(dev.id for dev in tree.iter_iot_devices())
        return DeviceInventory(
            camera_ids=frozenset(camera_ids), iot_device_ids=frozenset(device_ids)
        )

    async def load_assignment_edges(
        self, kind: AssignmentKind, container_ids: Sequence[str]
    ) -> list[AssignmentEdge]:
        self._check("load_assignment_edges", kind.value)
        wanted = set(container_ids)
        return [edge for edge in self.edges.get(kind, []) if edge.container_id in wanted]

    async def load_project_scalars(self, project_id: str) -> ProjectRecord:
        self._check("load_project_scalars", project_id)
        if project_id not in self.projects:
            raise LoaderError.not_found("load_project_scalars", project_id)
        return self.projects[project_id]

    async def load_aux_counts(self, project_id: str) -> AuxCounts:
        self._check("load_aux_counts", project_id)
        return self.aux_counts.get(project_id, AuxCounts())

    async def load_factory_topology(self, project_id: str) -> FactoryTopology:
        self._check("load_factory_topology", project_id)
        return self.topologies.get(project_id, FactoryTopology())
