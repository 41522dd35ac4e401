"""
Tab/Gate Aggregator

Folds line completeness and the independent project sub-checks into one map of
readiness flags. Flags computed from the project record are available at once;
the rest need further reads, are fetched concurrently and merged when they
resolve. A failed sub-check is logged and reported as False.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, replace
from typing import Any

from readiness_gate.core.observability import get_logger

from ..entities.project import AuxCounts, ProjectRecord
from ..repositories.data_loader import FeasibilityDataLoader
from .coverage_checker import HardwareCoverageChain
from .line_completeness_service import LineCompletenessService
from .topology_checker import topology_gaps

logger = get_logger(__name__)

SYNCHRONOUS_FLAGS = ("overview", "infrastructure", "factory_config", "hardware_summary")
ASYNCHRONOUS_FLAGS = (
    "contacts",
    "factory",
    "lines",
    "feature_requirements",
    "factory_hardware",
)

_CAMEL_CASE = {
    "factory_config": "factoryConfig",
    "feature_requirements": "featureRequirements",
    "factory_hardware": "factoryHardware",
    "hardware_summary": "hardwareSummary",
}


@dataclass(frozen=True)
class TabCompleteness:
    """Readiness flag per project tab. Every flag defaults to False."""

    overview: bool = False
    contacts: bool = False
    factory: bool = False
    factory_config: bool = False
    lines: bool = False
    infrastructure: bool = False
    feature_requirements: bool = False
    factory_hardware: bool = False
    hardware_summary: bool = False

    @property
    def all_green(self) -> bool:
        """True when every tab is complete; required by the feasibility gate."""
        return all(asdict(self).values())

    def merge(self, flags: dict[str, bool]) -> "TabCompleteness":
        return replace(self, **flags)

    def without_asynchronous(self) -> "TabCompleteness":
        """Copy with every asynchronous flag reset to False."""
        return replace(self, **{name: False for name in ASYNCHRONOUS_FLAGS})

    def to_dict(self) -> dict[str, bool]:
        return {_CAMEL_CASE.get(key, key): value for key, value in asdict(self).items()}


def overview_complete(project: ProjectRecord) -> bool:
    """All overview fields filled and the three project confirmations given."""
    return bool(
        project.company_name
        and project.domain
        and project.site_name
        and project.site_address
        and project.segment
        and project.line_description
        and project.product_description
        and project.project_goals
        and project.final_scoping_complete
        and project.contract_signed
        and project.implementation_handover
    )


def infrastructure_complete(project: ProjectRecord) -> bool:
    """Cable spec set, at least one bandwidth figure, and customer confirmation."""
    has_bandwidth = any(
        (
            project.infra_internet_speed_mbps,
            project.infra_lan_speed_gbps,
            project.infra_switch_uplink_gbps,
        )
    )
    return bool(
        project.infra_cable_spec
        and has_bandwidth
        and project.infra_customer_confirmed is True
    )


def factory_config_complete(project: ProjectRecord) -> bool:
    return (project.sku_count or 0) > 0


def hardware_summary_complete(project: ProjectRecord) -> bool:
    """At least one hardware quantity requested."""
    return any(
        (quantity or 0) > 0
        for quantity in (
            project.servers_required,
            project.gateways_required,
            project.tv_display_devices_required,
            project.receivers_required,
            project.lines_required,
        )
    )


def synchronous_flags(project: ProjectRecord) -> dict[str, bool]:
    """Flags computed from the already-loaded project record."""
    return {
        "overview": overview_complete(project),
        "infrastructure": infrastructure_complete(project),
        "factory_config": factory_config_complete(project),
        "hardware_summary": hardware_summary_complete(project),
    }


class TabCompletenessAggregator:
    """Computes the readiness flag map for one project."""

    def __init__(
        self,
        loader: FeasibilityDataLoader,
        line_service: LineCompletenessService | None = None,
        coverage_chain: HardwareCoverageChain | None = None,
    ):
        self._loader = loader
        self._line_service = line_service or LineCompletenessService(loader)
        self._coverage_chain = coverage_chain or HardwareCoverageChain(loader)

    async def asynchronous_flags(self, project_id: str) -> dict[str, bool]:
        """
        Fan out the sub-checks that need further reads and join them.

        Results may arrive in any order; each failed check folds to False
        without affecting its siblings.
        """
        checks: dict[str, Callable[[], Awaitable[Any]]] = {
            "aux": lambda: self._loader.load_aux_counts(project_id),
            "factory": lambda: self._factory_complete(project_id),
            "lines": lambda: self._line_service.all_lines_complete(project_id),
            "factory_hardware": lambda: self._hardware_complete(project_id),
        }
        outcomes = await asyncio.gather(
            *(check() for check in checks.values()), return_exceptions=True
        )
        resolved: dict[str, Any] = {}
        for name, outcome in zip(checks, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(
                    "tab_check_failed",
                    project_id=project_id,
                    check=name,
                    error=str(outcome),
                )
                resolved[name] = None
            else:
                resolved[name] = outcome

        aux: AuxCounts | None = resolved["aux"]
        return {
            "contacts": aux is not None and aux.contacts_count > 0,
            "feature_requirements": aux is not None
            and aux.open_feature_request_count == 0,
            "factory": resolved["factory"] is True,
            "lines": resolved["lines"] is True,
            "factory_hardware": resolved["factory_hardware"] is True,
        }

    async def compute(self, project: ProjectRecord) -> TabCompleteness:
        """Compute every flag for a project."""
        flags = TabCompleteness().merge(synchronous_flags(project))
        return flags.merge(await self.asynchronous_flags(project.id))

    async def _factory_complete(self, project_id: str) -> bool:
        gaps = topology_gaps(await self._loader.load_factory_topology(project_id))
        if gaps:
            logger.debug("factory_topology_incomplete", project_id=project_id, gaps=len(gaps))
        return not gaps

    async def _hardware_complete(self, project_id: str) -> bool:
        result = await self._coverage_chain.evaluate(project_id)
        return result.is_complete
