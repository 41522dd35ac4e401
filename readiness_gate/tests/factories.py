"""
Test Data Factories

Factory helpers for building fully configured (or deliberately incomplete)
lines, cameras and projects.
"""

from uuid import uuid4

from readiness_gate.domain.feasibility.entities.line import (
    Camera,
    CameraAttribute,
    Equipment,
    IoTDevice,
    Line,
    LineTree,
    Position,
    RelayOutput,
)
from readiness_gate.domain.feasibility.entities.project import (
    Factory,
    FactoryGroup,
    FactoryTopology,
    HardwareRequirement,
    ProjectRecord,
)
from readiness_gate.domain.feasibility.value_objects.enums import HardwareKind


def _id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:8]}"


class CameraFactory:
    """Factory for creating Camera test instances."""

    @staticmethod
    def create(**overrides) -> Camera:
        """Create a camera that passes every camera rule unless overridden."""
        fields = {
            "id": _id("cam"),
            "name": "Top Cam",
            "model": "Basler ace 2",
            "mac_address": "00:1A:2B:3C:4D:5E",
            "horizontal_fov": "320",
            "working_distance": "450",
            "smallest_text": "2",
            "use_case_ids": ["uc-date-code"],
            "attributes": [CameraAttribute(id="attr-1", title="Date code")],
            "product_flow": "left_to_right",
            "view_description": "Label panel, front face",
            "light_required": True,
            "light_id": "light-ring-1",
            "plc_attached": True,
            "plc_master_id": "plc-s7-1200",
            "relay_outputs": [RelayOutput(id="relay-1", output_number=1, type="reject")],
            "hmi_required": False,
            "placement_can_fit": True,
            "placement_fabrication_confirmed": True,
            "placement_fov_suitable": True,
            "placement_description": "Bracket above conveyor after labeller",
        }
        fields.update(overrides)
        return Camera(**fields)

    @staticmethod
    def blank(**overrides) -> Camera:
        """Create a camera with nothing filled in."""
        fields = {"id": _id("cam")}
        fields.update(overrides)
        return Camera(**fields)


class LineFactory:
    """Factory for creating Line and LineTree test instances."""

    @staticmethod
    def create(**overrides) -> Line:
        """Create a line whose scalar fields are all set."""
        fields = {
            "id": _id("line"),
            "line_name": "Line 1",
            "min_speed": 60,
            "max_speed": 120,
            "line_description": "Bottling line",
            "product_description": "500ml PET",
            "photos_url": "https://photos.example.com/line-1",
            "number_of_products": 12,
            "number_of_artworks": 30,
        }
        fields.update(overrides)
        return Line(**fields)

    @staticmethod
    def tree(line: Line, positions: list[Position]) -> LineTree:
        return LineTree(id=line.id, positions=positions)

    @staticmethod
    def complete_tree(line: Line, cameras: int = 1, iot_devices: int = 0) -> LineTree:
        """A tree that passes every walk rule for solution type BOTH."""
        equipment = Equipment(
            id=_id("eq"),
            name="Labeller",
            cameras=[CameraFactory.create(name=f"Cam {i + 1}") for i in range(cameras)],
            iot_devices=[
                IoTDevice(id=_id("dev"), name=f"Sensor {i + 1}") for i in range(iot_devices)
            ],
        )
        return LineTree(
            id=line.id,
            positions=[
                Position(id=_id("pos"), name="Infeed", titles=["RLE", "OP"], equipment=[equipment])
            ],
        )


class ProjectFactory:
    """Factory for creating project records and topologies."""

    @staticmethod
    def create(**overrides) -> ProjectRecord:
        """Create a project whose synchronous tab checks all pass."""
        fields = {
            "id": _id("proj"),
            "company_name": "Acme Beverages",
            "domain": "acme.example.com",
            "site_name": "Leeds",
            "site_address": "1 Canal St, Leeds",
            "segment": "Food & Beverage",
            "line_description": "Two bottling lines",
            "product_description": "Soft drinks",
            "project_goals": "Label verification",
            "final_scoping_complete": True,
            "contract_signed": True,
            "implementation_handover": True,
            "servers_required": 1,
            "sku_count": 40,
            "infra_cable_spec": "Cat 6",
            "infra_internet_speed_mbps": 100,
            "infra_customer_confirmed": True,
        }
        fields.update(overrides)
        return ProjectRecord(**fields)

    @staticmethod
    def topology(factories: int = 1, groups: int = 1, lines: int = 1, shifts: int = 1) -> FactoryTopology:
        return FactoryTopology(
            portal_id=_id("portal"),
            portal_url="https://acme.portal.example.com",
            factories=[
                Factory(
                    id=_id("factory"),
                    name=f"Factory {f + 1}",
                    shift_count=shifts,
                    groups=[
                        FactoryGroup(id=_id("group"), name=f"Group {g + 1}", line_count=lines)
                        for g in range(groups)
                    ],
                )
                for f in range(factories)
            ],
        )

    @staticmethod
    def hardware(project_id: str, kind: HardwareKind, hardware_id: str | None = None) -> HardwareRequirement:
        return HardwareRequirement(
            id=hardware_id or _id(kind.value),
            kind=kind,
            project_id=project_id,
            name=f"{kind.value.title()} A",
        )
