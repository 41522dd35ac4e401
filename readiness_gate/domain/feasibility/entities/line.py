"""
Line configuration tree.

Line → Position → Equipment → {Camera | IoTDevice}, as loaded for one
evaluation pass.
"""

from typing import Any

from pydantic import Field, field_validator

from ...shared.base import Entity, ValueObject
from ..value_objects.enums import TriState


class RelayOutput(ValueObject):
    """Relay output wired from a camera's PLC."""

    id: str | None = None
    output_number: int | None = None
    type: str | None = None
    custom_name: str | None = None


class CameraAttribute(ValueObject):
    """Inspected attribute (e.g. date code, lot number) for a camera view."""

    id: str | None = None
    title: str | None = None
    description: str | None = None


class Camera(Entity):
    """Vision camera mounted on a piece of equipment."""

    # Identity
    name: str | None = None
    model: str | None = None
    mac_address: str | None = None

    # Measurement
    horizontal_fov: str | float | None = None
    working_distance: str | float | None = None
    smallest_text: str | float | None = None

    # Classification
    use_case_ids: list[str] = Field(default_factory=list)
    attributes: list[CameraAttribute] = Field(default_factory=list)
    product_flow: str | None = None
    view_description: str | None = None

    # Lighting
    light_required: TriState = TriState.UNSET
    light_id: str | None = None

    # PLC
    plc_attached: TriState = TriState.UNSET
    plc_master_id: str | None = None
    relay_outputs: list[RelayOutput] = Field(default_factory=list)

    # HMI
    hmi_required: TriState = TriState.UNSET

    # Placement
    placement_can_fit: bool | None = None
    placement_fabrication_confirmed: bool | None = None
    placement_fov_suitable: bool | None = None
    placement_description: str | None = None

    @field_validator("light_required", "plc_attached", "hmi_required", mode="before")
    @classmethod
    def coerce_tri_state(cls, v: Any) -> TriState:
        return TriState.from_value(v)

    @property
    def display_name(self) -> str:
        return self.name or self.mac_address or "Unnamed"


class IoTDevice(Entity):
    """IoT sensor attached to a piece of equipment."""

    name: str | None = None
    mac_address: str | None = None
    hardware_model_id: str | None = None


class Equipment(Entity):
    """Machine at a position, carrying cameras and IoT devices."""

    name: str = ""
    cameras: list[Camera] = Field(default_factory=list)
    iot_devices: list[IoTDevice] = Field(default_factory=list)

    @property
    def devices(self) -> list[Camera | IoTDevice]:
        return [*self.cameras, *self.iot_devices]


class Position(Entity):
    """Station on the process flow of a line."""

    name: str = ""
    titles: list[str] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)

    def has_title(self, title: str) -> bool:
        return title in self.titles


class LineTree(Entity):
    """Nested position/equipment/device tree of one line (id is the line id)."""

    positions: list[Position] = Field(default_factory=list)

    def iter_cameras(self):
        for position in self.positions:
            for equipment in position.equipment:
                yield from equipment.cameras

    def iter_iot_devices(self):
        for position in self.positions:
            for equipment in position.equipment:
                yield from equipment.iot_devices


class Line(Entity):
    """Production line scalars used by the Line Information checks."""

    line_name: str | None = None
    min_speed: float | None = None
    max_speed: float | None = None
    line_description: str | None = None
    product_description: str | None = None
    photos_url: str | None = None
    number_of_products: int | None = None
    number_of_artworks: int | None = None
