"""
Readiness application service.

Public entry points consumed by the feasibility gate: line completeness, the
all-lines check, hardware coverage and the tab flag map.
"""

from collections.abc import Mapping

from readiness_gate.core.observability import get_logger, set_evaluation_id
from readiness_gate.domain.feasibility.entities.line import Line
from readiness_gate.domain.feasibility.entities.project import ProjectRecord
from readiness_gate.domain.feasibility.repositories.data_loader import (
    FeasibilityDataLoader,
)
from readiness_gate.domain.feasibility.services.coverage_checker import (
    HardwareCoverageChain,
)
from readiness_gate.domain.feasibility.services.line_completeness_service import (
    LineCompletenessService,
)
from readiness_gate.domain.feasibility.services.tab_aggregator import (
    TabCompleteness,
    TabCompletenessAggregator,
)
from readiness_gate.domain.feasibility.services.topology_checker import topology_gaps
from readiness_gate.domain.feasibility.value_objects.enums import SolutionType
from readiness_gate.domain.feasibility.value_objects.results import (
    HardwareCoverageResult,
    LineCompletenessResult,
    TopologyGap,
)
from readiness_gate.infrastructure.cache.line_result_cache import LineResultCache

from .tab_completeness_tracker import TabCompletenessTracker

logger = get_logger(__name__)


class ReadinessService:
    """
    Facade over the completeness engine.

    Holds no evaluation state of its own: the line cache and the tab tracker
    are caller-side helpers keyed by generation, and every call reads fresh
    data through the loader.
    """

    def __init__(
        self,
        loader: FeasibilityDataLoader,
        cache: LineResultCache | None = None,
        max_concurrent_loads: int | None = None,
    ):
        self._loader = loader
        self._line_service = LineCompletenessService(
            loader, max_concurrent_loads=max_concurrent_loads
        )
        self._coverage_chain = HardwareCoverageChain(loader)
        self._aggregator = TabCompletenessAggregator(
            loader, self._line_service, self._coverage_chain
        )
        self._tracker = TabCompletenessTracker(self._aggregator)
        self._cache = cache if cache is not None else LineResultCache()

    @property
    def tab_flags(self) -> TabCompleteness:
        """Latest published tab flags (eventually consistent)."""
        return self._tracker.flags

    async def check_line_completeness(
        self, line: Line, solution_type_map: Mapping[str, SolutionType | str]
    ) -> LineCompletenessResult:
        """Score one line."""
        set_evaluation_id()
        return await self._line_service.evaluate(line, solution_type_map)

    async def check_lines_completeness(
        self, project_id: str, generation: int
    ) -> dict[str, LineCompletenessResult]:
        """
        Score every line of a project, reusing results cached for ``generation``.

        Raises:
            LoaderError: If the project's lines cannot be loaded
        """
        set_evaluation_id(f"{project_id}:{generation}")
        lines = await self._loader.load_project_lines(project_id)
        results: dict[str, LineCompletenessResult] = {}
        pending: list[Line] = []
        for line in lines:
            cached = self._cache.get(line.id, generation)
            if cached is None:
                pending.append(line)
            else:
                results[line.id] = cached

        if pending:
            solution_type_map = await self._line_service.load_solution_type_map(
                project_id
            )
            fresh = await self._line_service.evaluate_lines(pending, solution_type_map)
            for result in fresh.values():
                self._cache.set(result, generation)
            results.update(fresh)

        evicted = self._cache.evict_before(generation)
        logger.debug(
            "lines_evaluated",
            project_id=project_id,
            generation=generation,
            evaluated=len(pending),
            cached=len(lines) - len(pending),
            evicted=evicted,
        )
        return {line.id: results[line.id] for line in lines}

    async def check_all_lines_complete(self, project_id: str) -> bool:
        """True only if every line of the project is 100% complete."""
        set_evaluation_id()
        return await self._line_service.all_lines_complete(project_id)

    async def check_hardware_coverage(self, project_id: str) -> HardwareCoverageResult:
        """Run the camera→server, device→receiver, receiver→gateway chain."""
        set_evaluation_id()
        return await self._coverage_chain.evaluate(project_id)

    async def check_factory_topology(self, project_id: str) -> tuple[TopologyGap, ...]:
        """
        List the factory topology gaps of a project.

        Raises:
            LoaderError: If the topology cannot be loaded
        """
        set_evaluation_id()
        return topology_gaps(await self._loader.load_factory_topology(project_id))

    async def compute_tab_completeness(
        self, project: ProjectRecord, refresh_token: int
    ) -> TabCompleteness:
        """
        Recompute the tab flag map for ``project``.

        Results of an evaluation superseded by a newer refresh are discarded.
        """
        set_evaluation_id(f"{project.id}:{refresh_token}")
        return await self._tracker.refresh(project, refresh_token)

    async def compute_tab_completeness_for(
        self, project_id: str, refresh_token: int
    ) -> TabCompleteness:
        """
        Load the project record, then recompute its tab flag map.

        Raises:
            LoaderError: If the project record cannot be loaded
        """
        project = await self._loader.load_project_scalars(project_id)
        return await self.compute_tab_completeness(project, refresh_token)
