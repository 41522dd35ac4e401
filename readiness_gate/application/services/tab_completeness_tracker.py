"""
Tab completeness tracker.

Holds the eventually consistent flag map for the project currently on screen.
Synchronous flags are published as soon as a refresh starts; asynchronous
flags are merged only if no newer refresh has begun in the meantime.
"""

from readiness_gate.core.observability import get_logger
from readiness_gate.domain.feasibility.entities.project import ProjectRecord
from readiness_gate.domain.feasibility.services.tab_aggregator import (
    TabCompleteness,
    TabCompletenessAggregator,
    synchronous_flags,
)
from readiness_gate.domain.shared.exceptions import StaleEvaluationError

logger = get_logger(__name__)


class TabCompletenessTracker:
    """Generation-guarded holder of the readiness flags for one project view."""

    def __init__(self, aggregator: TabCompletenessAggregator):
        self._aggregator = aggregator
        self._generation = 0
        self._project_id: str | None = None
        self._refresh_token: int | None = None
        self._flags = TabCompleteness()

    @property
    def flags(self) -> TabCompleteness:
        """Current flags; asynchronous ones may still be pending."""
        return self._flags

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, project: ProjectRecord, refresh_token: int) -> int:
        """
        Start a new evaluation and publish its synchronous flags.

        Changing project resets the asynchronous flags to False. A new refresh
        token for the same project keeps their prior values until the new
        fetch resolves.

        Returns:
            Generation of the new evaluation
        """
        self._generation += 1
        if project.id != self._project_id:
            self._flags = self._flags.without_asynchronous()
        self._project_id = project.id
        self._refresh_token = refresh_token
        self._flags = self._flags.merge(synchronous_flags(project))
        return self._generation

    def commit(self, generation: int, flags: dict[str, bool]) -> TabCompleteness:
        """
        Merge asynchronous flags for ``generation``.

        Raises:
            StaleEvaluationError: If a newer evaluation has started
        """
        if generation != self._generation:
            raise StaleEvaluationError(generation, self._generation)
        self._flags = self._flags.merge(flags)
        return self._flags

    def is_outdated(self, project: ProjectRecord, refresh_token: int) -> bool:
        """True for a refresh token older than the one already applied."""
        return (
            project.id == self._project_id
            and self._refresh_token is not None
            and refresh_token < self._refresh_token
        )

    async def refresh(self, project: ProjectRecord, refresh_token: int) -> TabCompleteness:
        """
        Recompute every flag for ``project``.

        Returns the flag map after this evaluation; if it was superseded while
        its reads were in flight, its results are discarded and the current
        map is returned unchanged.
        """
        if self.is_outdated(project, refresh_token):
            logger.info(
                "tab_refresh_ignored",
                project_id=project.id,
                refresh_token=refresh_token,
                current_token=self._refresh_token,
            )
            return self._flags

        generation = self.begin(project, refresh_token)
        flags = await self._aggregator.asynchronous_flags(project.id)
        try:
            return self.commit(generation, flags)
        except StaleEvaluationError as e:
            logger.info(
                "tab_refresh_discarded",
                project_id=project.id,
                generation=e.generation,
                current_generation=e.current_generation,
            )
            return self._flags
