"""
Feasibility Data Loader Interface

Defines the read-only contract the engine consumes. Implementations build
typed snapshots from the configuration store; the engine never writes.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..entities.line import Line, LineTree
from ..entities.project import (
    AssignmentEdge,
    AuxCounts,
    DeviceInventory,
    FactoryTopology,
    HardwareRequirement,
    ProjectRecord,
)
from ..value_objects.enums import AssignmentKind, SolutionType


class FeasibilityDataLoader(ABC):
    """
    Abstract loader for feasibility snapshots.

    Every method reads fresh data; implementations must not cache across
    calls.
    """

    @abstractmethod
    async def load_line_tree(self, line_id: str) -> LineTree | None:
        """
        Load the full nested Position/Equipment/Camera/IoTDevice tree of a line.

        Args:
            line_id: Line identifier

        Returns:
            Line tree, or None if the store returned nothing

        Raises:
            LoaderError: If the read fails (not found or transient)
        """
        pass

    @abstractmethod
    async def load_project_lines(self, project_id: str) -> list[Line]:
        """
        Load the scalar records of every line in a project.

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_solution_type_map(self, project_id: str) -> dict[str, SolutionType]:
        """
        Load the per-line solution type keyed by line name.

        Derived from the Portal → Factory → Group → GroupLine hierarchy.
        Lines without an entry are treated as BOTH by the caller.

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_hardware_requirements(
        self, project_id: str
    ) -> list[HardwareRequirement]:
        """
        Load the servers, receivers and gateways required by a project.

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_device_inventory(self, project_id: str) -> DeviceInventory:
        """
        Load the ids of every camera and IoT device across the project's lines.

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_assignment_edges(
        self, kind: AssignmentKind, container_ids: Sequence[str]
    ) -> list[AssignmentEdge]:
        """
        Load the assignment edges of one coverage relation.

        Args:
            kind: Coverage relation to read
            container_ids: Containers whose edges are wanted

        Returns:
            Edges whose container is one of ``container_ids``

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_project_scalars(self, project_id: str) -> ProjectRecord:
        """
        Load the flat project record.

        Raises:
            LoaderError: If the read fails or the project does not exist
        """
        pass

    @abstractmethod
    async def load_aux_counts(self, project_id: str) -> AuxCounts:
        """
        Load contact and open feature-request counts.

        Raises:
            LoaderError: If the read fails
        """
        pass

    @abstractmethod
    async def load_factory_topology(self, project_id: str) -> FactoryTopology:
        """
        Load the portal/factory/group hierarchy with shift and line counts.

        Returns an empty topology when the project has no portal.

        Raises:
            LoaderError: If the read fails
        """
        pass
