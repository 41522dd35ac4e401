"""
Supabase feasibility loader.

Reads feasibility snapshots from the Supabase configuration store. The
supabase-py client is synchronous, so each query runs in a worker thread to
keep independent reads concurrent.
"""

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from readiness_gate.core.config import settings
from readiness_gate.core.observability import get_logger
from readiness_gate.core.supabase import SupabaseClient, get_supabase_client
from readiness_gate.domain.feasibility.entities.line import Line, LineTree
from readiness_gate.domain.feasibility.entities.project import (
    AssignmentEdge,
    AuxCounts,
    DeviceInventory,
    Factory,
    FactoryGroup,
    FactoryTopology,
    HardwareRequirement,
    ProjectRecord,
)
from readiness_gate.domain.feasibility.repositories.data_loader import (
    FeasibilityDataLoader,
)
from readiness_gate.domain.feasibility.value_objects.enums import (
    AssignmentKind,
    HardwareKind,
    SolutionType,
)
from readiness_gate.domain.shared.exceptions import LoaderError
from readiness_gate.infrastructure.mappers.line_tree_mapper import LineTreeMapper

logger = get_logger(__name__)

T = TypeVar("T")

LINE_COLUMNS = (
    "id, line_name, min_speed, max_speed, line_description, product_description, "
    "photos_url, number_of_products, number_of_artworks"
)

# (table, leaf column, container column) per coverage relation
ASSIGNMENT_TABLES: dict[AssignmentKind, tuple[str, str, str]] = {
    AssignmentKind.CAMERA_SERVER: (
        "camera_server_assignments",
        "camera_id",
        "server_requirement_id",
    ),
    AssignmentKind.DEVICE_RECEIVER: (
        "device_receiver_assignments",
        "iot_device_id",
        "receiver_requirement_id",
    ),
    AssignmentKind.RECEIVER_GATEWAY: (
        "receiver_gateway_assignments",
        "receiver_requirement_id",
        "gateway_requirement_id",
    ),
}

CLOSED_FEATURE_REQUEST_STATUSES = ("Complete", "Rejected")


class SupabaseFeasibilityLoader(FeasibilityDataLoader):
    """Loader reading from the Supabase tables behind the solutions portal."""

    def __init__(self, supabase: SupabaseClient | None = None):
        self._supabase = supabase or get_supabase_client()

    @property
    def _client(self) -> Client:
        return self._supabase.client

    async def _run(self, operation: str, query: Callable[[], T]) -> T:
        """Run one blocking query off the event loop, mapping store errors."""
        try:
            return await asyncio.to_thread(query)
        except (APIError, httpx.HTTPError) as e:
            logger.warning("supabase_query_failed", operation=operation, error=str(e))
            raise LoaderError.transient(operation, str(e)) from e

    async def _select_in(
        self, operation: str, table: str, columns: str, column: str, values: Sequence[str]
    ) -> list[dict[str, Any]]:
        if not values:
            return []
        response = await self._run(
            operation,
            lambda: self._client.table(table)
            .select(columns)
            .in_(column, list(values))
            .execute(),
        )
        return list(response.data or [])

    async def load_line_tree(self, line_id: str) -> LineTree | None:
        response = await self._run(
            "load_line_tree",
            lambda: self._client.rpc(
                settings.LINE_TREE_RPC,
                {"p_input_line_id": line_id, "p_table_name": settings.LINE_TREE_TABLE},
            ).execute(),
        )
        try:
            return LineTreeMapper.tree_from_rpc(line_id, response.data)
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            logger.warning("line_tree_payload_invalid", line_id=line_id, error=str(e))
            raise LoaderError.malformed("load_line_tree", line_id, str(e)) from e

    async def load_project_lines(self, project_id: str) -> list[Line]:
        response = await self._run(
            "load_project_lines",
            lambda: self._client.table("solutions_lines")
            .select(LINE_COLUMNS)
            .eq("solutions_project_id", project_id)
            .execute(),
        )
        return [LineTreeMapper.line_from_row(row) for row in response.data or []]

    async def _load_portal(self, project_id: str) -> dict[str, Any] | None:
        response = await self._run(
            "load_portal",
            lambda: self._client.table("solution_portals")
            .select("id, url")
            .eq("solutions_project_id", project_id)
            .maybe_single()
            .execute(),
        )
        # maybe_single() returns no response at all when the row is missing
        return response.data if response is not None else None

    async def load_solution_type_map(self, project_id: str) -> dict[str, SolutionType]:
        portal = await self._load_portal(project_id)
        if not portal:
            return {}
        factories = await self._select_in(
            "load_solution_type_map", "solution_factories", "id", "portal_id", [portal["id"]]
        )
        groups = await self._select_in(
            "load_solution_type_map",
            "factory_groups",
            "id",
            "factory_id",
            [f["id"] for f in factories],
        )
        group_lines = await self._select_in(
            "load_solution_type_map",
            "factory_group_lines",
            "name, solution_type",
            "group_id",
            [g["id"] for g in groups],
        )
        return {
            row["name"]: SolutionType.from_value(row.get("solution_type"))
            for row in group_lines
        }

    async def load_hardware_requirements(
        self, project_id: str
    ) -> list[HardwareRequirement]:
        response = await self._run(
            "load_hardware_requirements",
            lambda: self._client.table("project_iot_requirements")
            .select("id, name, hardware_type")
            .eq("solutions_project_id", project_id)
            .execute(),
        )
        kinds = {kind.value for kind in HardwareKind}
        return [
            HardwareRequirement(
                id=str(row["id"]),
                kind=HardwareKind(row["hardware_type"]),
                project_id=project_id,
                name=row.get("name"),
            )
            for row in response.data or []
            if row.get("hardware_type") in kinds
        ]

    async def load_device_inventory(self, project_id: str) -> DeviceInventory:
        lines = await self._run(
            "load_device_inventory",
            lambda: self._client.table("solutions_lines")
            .select("id")
            .eq("solutions_project_id", project_id)
            .execute(),
        )
        positions = await self._select_in(
            "load_device_inventory",
            "positions",
            "id",
            "solutions_line_id",
            [row["id"] for row in lines.data or []],
        )
        equipment = await self._select_in(
            "load_device_inventory",
            "equipment",
            "id",
            "position_id",
            [row["id"] for row in positions],
        )
        equipment_ids = [row["id"] for row in equipment]
        cameras, devices = await asyncio.gather(
            self._select_in(
                "load_device_inventory", "cameras", "id", "equipment_id", equipment_ids
            ),
            self._select_in(
                "load_device_inventory", "iot_devices", "id", "equipment_id", equipment_ids
            ),
        )
        return DeviceInventory(
            camera_ids=frozenset(str(row["id"]) for row in cameras),
            iot_device_ids=frozenset(str(row["id"]) for row in devices),
        )

    async def load_assignment_edges(
        self, kind: AssignmentKind, container_ids: Sequence[str]
    ) -> list[AssignmentEdge]:
        table, leaf_column, container_column = ASSIGNMENT_TABLES[kind]
        rows = await self._select_in(
            "load_assignment_edges",
            table,
            f"{leaf_column}, {container_column}",
            container_column,
            container_ids,
        )
        return [
            AssignmentEdge(
                leaf_id=str(row[leaf_column]), container_id=str(row[container_column])
            )
            for row in rows
        ]

    async def load_project_scalars(self, project_id: str) -> ProjectRecord:
        response = await self._run(
            "load_project_scalars",
            lambda: self._client.table("solutions_projects")
            .select("*, companies(name)")
            .eq("id", project_id)
            .maybe_single()
            .execute(),
        )
        if response is None or not response.data:
            raise LoaderError.not_found("load_project_scalars", project_id)
        return LineTreeMapper.project_from_row(response.data)

    async def load_aux_counts(self, project_id: str) -> AuxCounts:
        contacts, open_requests = await asyncio.gather(
            self._run(
                "load_aux_counts",
                lambda: self._client.table("contact_solutions_projects")
                .select("id", count="exact", head=True)
                .eq("solutions_project_id", project_id)
                .execute(),
            ),
            self._run(
                "load_aux_counts",
                lambda: self._client.table("feature_requests")
                .select("id", count="exact", head=True)
                .eq("solutions_project_id", project_id)
                .not_.in_("status", list(CLOSED_FEATURE_REQUEST_STATUSES))
                .execute(),
            ),
        )
        return AuxCounts(
            contacts_count=contacts.count or 0,
            open_feature_request_count=open_requests.count or 0,
        )

    async def load_factory_topology(self, project_id: str) -> FactoryTopology:
        portal = await self._load_portal(project_id)
        if not portal:
            return FactoryTopology()

        factories = await self._select_in(
            "load_factory_topology",
            "solution_factories",
            "id, name",
            "portal_id",
            [portal["id"]],
        )
        factory_ids = [row["id"] for row in factories]
        shifts, groups = await asyncio.gather(
            self._select_in(
                "load_factory_topology", "factory_shifts", "factory_id", "factory_id", factory_ids
            ),
            self._select_in(
                "load_factory_topology",
                "factory_groups",
                "id, name, factory_id",
                "factory_id",
                factory_ids,
            ),
        )
        group_lines = await self._select_in(
            "load_factory_topology",
            "factory_group_lines",
            "group_id",
            "group_id",
            [row["id"] for row in groups],
        )

        return FactoryTopology(
            portal_id=str(portal["id"]),
            portal_url=portal.get("url"),
            factories=[
                Factory(
                    id=str(factory["id"]),
                    name=factory.get("name"),
                    shift_count=sum(
                        1 for shift in shifts if shift["factory_id"] == factory["id"]
                    ),
                    groups=[
                        FactoryGroup(
                            id=str(group["id"]),
                            name=group.get("name"),
                            line_count=sum(
                                1
                                for line in group_lines
                                if line["group_id"] == group["id"]
                            ),
                        )
                        for group in groups
                        if group["factory_id"] == factory["id"]
                    ],
                )
                for factory in factories
            ],
        )
