"""Project-level records: scalars, counts, hardware and factory topology."""

from pydantic import Field

from ...shared.base import Entity, ValueObject
from ..value_objects.enums import HardwareKind


class ProjectRecord(Entity):
    """Flat project fields used by the synchronous tab checks."""

    company_name: str | None = None
    domain: str | None = None
    site_name: str | None = None
    site_address: str | None = None
    segment: str | None = None
    line_description: str | None = None
    product_description: str | None = None
    project_goals: str | None = None
    final_scoping_complete: bool | None = None
    contract_signed: bool | None = None
    implementation_handover: bool | None = None

    # Hardware summary quantities
    servers_required: int | None = None
    gateways_required: int | None = None
    tv_display_devices_required: int | None = None
    receivers_required: int | None = None
    lines_required: int | None = None

    # Factory configuration
    sku_count: int | None = None

    # Infrastructure
    infra_cable_spec: str | None = None
    infra_internet_speed_mbps: float | None = None
    infra_lan_speed_gbps: float | None = None
    infra_switch_uplink_gbps: float | None = None
    infra_customer_confirmed: bool | None = None


class AuxCounts(ValueObject):
    """Counts of related records needed by the asynchronous tab checks."""

    contacts_count: int = 0
    open_feature_request_count: int = 0


class HardwareRequirement(Entity):
    """Server, receiver or gateway required by a project."""

    kind: HardwareKind
    project_id: str
    name: str | None = None


class AssignmentEdge(ValueObject):
    """Leaf assigned to a container (camera→server, device→receiver, ...)."""

    leaf_id: str
    container_id: str


class DeviceInventory(ValueObject):
    """Ids of every camera and IoT device across a project's lines."""

    camera_ids: frozenset[str] = frozenset()
    iot_device_ids: frozenset[str] = frozenset()


class FactoryGroup(Entity):
    name: str | None = None
    line_count: int = 0


class Factory(Entity):
    name: str | None = None
    shift_count: int = 0
    groups: list[FactoryGroup] = Field(default_factory=list)


class FactoryTopology(ValueObject):
    """Portal → Factory → Group → GroupLine hierarchy of a project."""

    portal_id: str | None = None
    portal_url: str | None = None
    factories: list[Factory] = Field(default_factory=list)
