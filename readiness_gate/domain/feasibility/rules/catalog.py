"""Rule tables for lines, cameras and the line walk."""

from ..entities.line import Equipment, Position
from ..value_objects.enums import SolutionType
from .field_rules import (
    CollectionNonEmpty,
    ConditionalGroup,
    Confirmation,
    FieldRule,
    JointPresence,
    Presence,
    rule_set,
)

LINE_INFORMATION = "Line Information"
PROCESS_FLOW = "Process Flow"
POSITIONS_AND_EQUIPMENT = "Positions & Equipment"

# Line scalars pass on any non-null, non-empty value (0 counts as set)
LINE_RULES: tuple[FieldRule, ...] = rule_set(
    Presence("Line Name", lambda line: line.line_name),
    Presence("Min Speed", lambda line: line.min_speed),
    Presence("Max Speed", lambda line: line.max_speed),
    Presence("Line Description", lambda line: line.line_description),
    Presence("Product Description", lambda line: line.product_description),
    Presence("Photos URL", lambda line: line.photos_url),
    Presence("Number of Products", lambda line: line.number_of_products),
    Presence("Number of Artworks", lambda line: line.number_of_artworks),
)

CAMERA_RULES: tuple[FieldRule, ...] = rule_set(
    JointPresence(
        (
            ("Camera Name", lambda cam: cam.name),
            ("Camera Model", lambda cam: cam.model),
        )
    ),
    # Measurements use plain truthiness, so a measured 0 is a gap.
    # TODO: confirm with product whether 0 is a legitimate measurement.
    Presence("Horizontal FOV", lambda cam: cam.horizontal_fov, truthy=True),
    Presence("Working Distance", lambda cam: cam.working_distance, truthy=True),
    Presence("Smallest Text", lambda cam: cam.smallest_text, truthy=True),
    CollectionNonEmpty("At least 1 Use Case", lambda cam: cam.use_case_ids),
    CollectionNonEmpty("At least 1 Attribute", lambda cam: cam.attributes),
    Presence("Product Flow Direction", lambda cam: cam.product_flow, truthy=True),
    Presence("Camera View Description", lambda cam: cam.view_description, truthy=True),
    ConditionalGroup(
        "Confirm whether lighting is required",
        lambda cam: cam.light_required,
        dependents=(
            Presence(
                "Light Model (required when lighting enabled)",
                lambda cam: cam.light_id,
                truthy=True,
            ),
        ),
    ),
    ConditionalGroup(
        "Confirm whether PLC is required",
        lambda cam: cam.plc_attached,
        dependents=(
            Presence(
                "PLC Model (required when PLC enabled)",
                lambda cam: cam.plc_master_id,
                truthy=True,
            ),
            CollectionNonEmpty(
                "At least 1 Relay Output (required when PLC enabled)",
                lambda cam: cam.relay_outputs,
            ),
        ),
    ),
    ConditionalGroup("Confirm whether HMI is required", lambda cam: cam.hmi_required),
    Confirmation("Confirm camera can fit", lambda cam: cam.placement_can_fit),
    Confirmation(
        "Confirm fabrication/bracketry with customer",
        lambda cam: cam.placement_fabrication_confirmed,
    ),
    Confirmation(
        "Confirm FOV suitable for all artworks/product types",
        lambda cam: cam.placement_fov_suitable,
    ),
    Presence("Position Description", lambda cam: cam.placement_description, truthy=True),
)


def process_flow_rule() -> FieldRule:
    return CollectionNonEmpty(
        "At least 1 position required", lambda tree: tree.positions
    )


def position_equipment_rule(position: Position) -> FieldRule:
    return CollectionNonEmpty(
        f'Position "{position.name}" needs equipment', lambda pos: pos.equipment
    )


def device_presence_rule(equipment: Equipment, solution_type: SolutionType) -> FieldRule:
    """Device rule for one piece of equipment, chosen by the line's solution type."""
    if solution_type == SolutionType.VISION:
        return CollectionNonEmpty(
            f'"{equipment.name}" needs a camera (Vision)', lambda eq: eq.cameras
        )
    if solution_type == SolutionType.IOT:
        return CollectionNonEmpty(
            f'"{equipment.name}" needs an IoT device', lambda eq: eq.iot_devices
        )
    return CollectionNonEmpty(
        f'"{equipment.name}" needs a camera or IoT device', lambda eq: eq.devices
    )


def required_title_rule(title: str) -> FieldRule:
    """Line-wide check that at least one position carries ``title``."""
    return CollectionNonEmpty(
        f"{title} title must be assigned to a position",
        lambda tree: [pos for pos in tree.positions if pos.has_title(title)],
    )


def camera_category(camera_name: str, equipment: Equipment) -> str:
    return f'Camera "{camera_name}" on {equipment.name}'


__all__ = [
    "CAMERA_RULES",
    "LINE_INFORMATION",
    "LINE_RULES",
    "POSITIONS_AND_EQUIPMENT",
    "PROCESS_FLOW",
    "camera_category",
    "device_presence_rule",
    "position_equipment_rule",
    "process_flow_rule",
    "required_title_rule",
]
