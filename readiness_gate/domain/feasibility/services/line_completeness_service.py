"""
Line Completeness Service

Entry point that scores one production line: walks its tree and turns the
merged counts into a percentage. Every declared rule is load-bearing, so a
line is complete exactly when it scores 100.
"""

import asyncio
from collections.abc import Mapping

from readiness_gate.core.config import settings
from readiness_gate.core.observability import get_logger

from ...shared.exceptions import LoaderError
from ..entities.line import Line
from ..repositories.data_loader import FeasibilityDataLoader
from ..value_objects.enums import SolutionType
from ..value_objects.results import LineCompletenessResult
from .tree_walker import LineTreeWalker

logger = get_logger(__name__)


def resolve_solution_type(
    line: Line, solution_type_map: Mapping[str, SolutionType | str]
) -> SolutionType:
    """Look up a line's solution type by name; absent entries mean BOTH."""
    return SolutionType.from_value(solution_type_map.get(line.line_name or ""))


class LineCompletenessService:
    """Scores lines against the line, position, equipment and camera rules."""

    def __init__(
        self,
        loader: FeasibilityDataLoader,
        walker: LineTreeWalker | None = None,
        max_concurrent_loads: int | None = None,
    ):
        self._loader = loader
        self._walker = walker or LineTreeWalker(loader)
        self._semaphore = asyncio.Semaphore(
            max_concurrent_loads or settings.MAX_CONCURRENT_LINE_LOADS
        )

    async def evaluate(
        self, line: Line, solution_type_map: Mapping[str, SolutionType | str]
    ) -> LineCompletenessResult:
        """
        Evaluate the completeness of one line.

        Args:
            line: Line scalars
            solution_type_map: Solution type per line name

        Returns:
            Line completeness result
        """
        solution_type = resolve_solution_type(line, solution_type_map)
        async with self._semaphore:
            walk = await self._walker.walk(line, solution_type)

        result = LineCompletenessResult(
            line_id=line.id, percentage=walk.percentage, gaps=walk.gaps
        )
        logger.debug(
            "line_evaluated",
            line_id=line.id,
            solution_type=solution_type.value,
            passed=walk.passed,
            total=walk.total,
            percentage=result.percentage,
        )
        return result

    async def load_solution_type_map(self, project_id: str) -> dict[str, SolutionType]:
        """Load solution types, degrading to an empty map (all BOTH) on failure."""
        try:
            return await self._loader.load_solution_type_map(project_id)
        except LoaderError as e:
            logger.warning(
                "solution_type_map_load_failed",
                project_id=project_id,
                error=e.message,
            )
            return {}

    async def evaluate_lines(
        self,
        lines: list[Line],
        solution_type_map: Mapping[str, SolutionType | str],
    ) -> dict[str, LineCompletenessResult]:
        """Evaluate several lines concurrently, keyed by line id."""
        results = await asyncio.gather(
            *(self.evaluate(line, solution_type_map) for line in lines)
        )
        return {result.line_id: result for result in results}

    async def evaluate_project(self, project_id: str) -> dict[str, LineCompletenessResult]:
        """
        Evaluate every line of a project.

        Raises:
            LoaderError: If the project's lines cannot be loaded
        """
        lines, solution_type_map = await asyncio.gather(
            self._loader.load_project_lines(project_id),
            self.load_solution_type_map(project_id),
        )
        return await self.evaluate_lines(lines, solution_type_map)

    async def all_lines_complete(self, project_id: str) -> bool:
        """
        Check that every line of a project is complete.

        An AND over all lines: a project without lines, or whose lines cannot
        be loaded, is not complete.
        """
        try:
            results = await self.evaluate_project(project_id)
        except LoaderError as e:
            logger.warning("project_lines_load_failed", project_id=project_id, error=e.message)
            return False

        if not results:
            return False
        return all(result.is_complete for result in results.values())
