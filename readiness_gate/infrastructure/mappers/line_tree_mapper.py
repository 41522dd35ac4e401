"""
Mapper for converting configuration-store rows into feasibility entities.

Decouples the rule engine from the column names of the store and from the
nested shape returned by the line tree RPC.
"""

from typing import Any

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
from readiness_gate.domain.feasibility.entities.project import ProjectRecord

Row = dict[str, Any]


class LineTreeMapper:
    """
    Mapper class for line trees and project rows.

    Missing nested collections map to empty lists; missing scalars map to None
    so the rule engine reports them as gaps.
    """

    @staticmethod
    def tree_from_rpc(line_id: str, payload: Row | None) -> LineTree | None:
        """
        Convert the line tree RPC payload into a LineTree.

        Args:
            line_id: Line the payload belongs to
            payload: ``{"positions": [...]}`` as returned by the RPC

        Returns:
            Line tree, or None for an empty payload
        """
        if not payload:
            return None
        return LineTree(
            id=line_id,
            positions=[
                LineTreeMapper.position_from_row(row)
                for row in payload.get("positions") or []
            ],
        )

    @staticmethod
    def position_from_row(row: Row) -> Position:
        return Position(
            id=str(row["id"]),
            name=row.get("name") or "",
            titles=[
                title_row["title"]
                for title_row in row.get("position_titles") or []
                if title_row.get("title")
            ],
            equipment=[
                LineTreeMapper.equipment_from_row(eq)
                for eq in row.get("equipment") or []
            ],
        )

    @staticmethod
    def equipment_from_row(row: Row) -> Equipment:
        return Equipment(
            id=str(row["id"]),
            name=row.get("name") or "",
            cameras=[
                LineTreeMapper.camera_from_row(cam) for cam in row.get("cameras") or []
            ],
            iot_devices=[
                LineTreeMapper.iot_device_from_row(dev)
                for dev in row.get("iot_devices") or []
            ],
        )

    @staticmethod
    def camera_from_row(row: Row) -> Camera:
        return Camera(
            id=str(row["id"]),
            name=row.get("name"),
            model=row.get("camera_type"),
            mac_address=row.get("mac_address"),
            horizontal_fov=row.get("horizontal_fov"),
            working_distance=row.get("working_distance"),
            smallest_text=row.get("smallest_text"),
            use_case_ids=[str(uc) for uc in row.get("use_case_ids") or []],
            attributes=[
                CameraAttribute(
                    id=attr.get("id"),
                    title=attr.get("title"),
                    description=attr.get("description"),
                )
                for attr in row.get("attributes") or []
            ],
            product_flow=row.get("product_flow"),
            view_description=row.get("camera_view_description"),
            light_required=row.get("light_required"),
            light_id=row.get("light_id"),
            plc_attached=row.get("plc_attached"),
            plc_master_id=row.get("plc_master_id"),
            relay_outputs=[
                RelayOutput(
                    id=out.get("id"),
                    output_number=out.get("output_number"),
                    type=out.get("type"),
                    custom_name=out.get("custom_name"),
                )
                for out in row.get("relay_outputs") or []
            ],
            hmi_required=row.get("hmi_required"),
            placement_can_fit=row.get("placement_camera_can_fit"),
            placement_fabrication_confirmed=row.get("placement_fabrication_confirmed"),
            placement_fov_suitable=row.get("placement_fov_suitable"),
            placement_description=row.get("placement_position_description"),
        )

    @staticmethod
    def iot_device_from_row(row: Row) -> IoTDevice:
        return IoTDevice(
            id=str(row["id"]),
            name=row.get("name"),
            mac_address=row.get("mac_address"),
            hardware_model_id=row.get("hardware_master_id"),
        )

    @staticmethod
    def line_from_row(row: Row) -> Line:
        return Line(
            id=str(row["id"]),
            line_name=row.get("line_name"),
            min_speed=row.get("min_speed"),
            max_speed=row.get("max_speed"),
            line_description=row.get("line_description"),
            product_description=row.get("product_description"),
            photos_url=row.get("photos_url"),
            number_of_products=row.get("number_of_products"),
            number_of_artworks=row.get("number_of_artworks"),
        )

    @staticmethod
    def project_from_row(row: Row) -> ProjectRecord:
        company = row.get("companies") or {}
        return ProjectRecord(
            id=str(row["id"]),
            company_name=company.get("name"),
            **{
                field: row.get(field)
                for field in ProjectRecord.model_fields
                if field not in ("id", "company_name")
            },
        )
