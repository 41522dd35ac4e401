"""Factory topology completeness."""

from ..entities.project import FactoryTopology
from ..value_objects.results import TopologyGap


def topology_gaps(topology: FactoryTopology) -> tuple[TopologyGap, ...]:
    """
    List what is missing from the Portal → Factory → Group → GroupLine hierarchy.

    Gaps come portal first, then per factory (shifts, groups), then one per
    group without lines located as ``<factory> › <group>``.
    """
    gaps: list[TopologyGap] = []
    if not topology.portal_url:
        gaps.append(TopologyGap("Portal", "No portal URL set"))
    if not topology.factories:
        gaps.append(TopologyGap("Factories", "No factories added"))

    for factory in topology.factories:
        location = factory.name or ""
        if factory.shift_count < 1:
            gaps.append(TopologyGap("Shifts", "No shift patterns defined", location))
        if not factory.groups:
            gaps.append(TopologyGap("Groups", "No groups defined", location))

    for factory in topology.factories:
        for group in factory.groups:
            if group.line_count < 1:
                gaps.append(
                    TopologyGap(
                        "Lines",
                        "No lines defined",
                        f"{factory.name or ''} › {group.name or ''}",
                    )
                )

    return tuple(gaps)


def is_topology_complete(topology: FactoryTopology) -> bool:
    """Complete when the topology has no gaps."""
    return not topology_gaps(topology)
