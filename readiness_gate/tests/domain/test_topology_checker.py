import pytest

from readiness_gate.domain.feasibility.entities.project import (
    Factory,
    FactoryGroup,
    FactoryTopology,
)
from readiness_gate.domain.feasibility.services.topology_checker import (
    is_topology_complete,
    topology_gaps,
)
from readiness_gate.domain.feasibility.value_objects.results import TopologyGap
from readiness_gate.tests.factories import ProjectFactory


class TestIsTopologyComplete:
    """Test the Portal → Factory → Group → GroupLine check."""

    def test_complete(self):
        assert is_topology_complete(ProjectFactory.topology(factories=2, groups=2))

    def test_no_portal(self):
        assert not is_topology_complete(FactoryTopology())

    def test_portal_without_url(self):
        topology = ProjectFactory.topology().model_copy(update={"portal_url": ""})
        assert not is_topology_complete(topology)

    def test_no_factories(self):
        assert not is_topology_complete(
            FactoryTopology(portal_id="p", portal_url="https://x.example.com")
        )

    @pytest.mark.parametrize(
        "kwargs", [{"shifts": 0}, {"groups": 0}, {"lines": 0}]
    )
    def test_missing_level(self, kwargs):
        assert not is_topology_complete(ProjectFactory.topology(**kwargs))

    def test_one_empty_group_fails_the_factory(self):
        topology = FactoryTopology(
            portal_id="p",
            portal_url="https://x.example.com",
            factories=[
                Factory(
                    id="f-1",
                    shift_count=2,
                    groups=[
                        FactoryGroup(id="g-1", line_count=3),
                        FactoryGroup(id="g-2", line_count=0),
                    ],
                )
            ],
        )

        assert not is_topology_complete(topology)


class TestTopologyGaps:
    """Test the area/issue/location gap list."""

    def test_complete_topology_has_no_gaps(self):
        assert topology_gaps(ProjectFactory.topology(factories=2, groups=2)) == ()

    def test_empty_topology(self):
        assert topology_gaps(FactoryTopology()) == (
            TopologyGap("Portal", "No portal URL set", "Global"),
            TopologyGap("Factories", "No factories added", "Global"),
        )

    def test_factory_without_shifts_or_groups(self):
        topology = FactoryTopology(
            portal_id="p",
            portal_url="https://x.example.com",
            factories=[Factory(id="f-1", name="Leeds")],
        )

        assert topology_gaps(topology) == (
            TopologyGap("Shifts", "No shift patterns defined", "Leeds"),
            TopologyGap("Groups", "No groups defined", "Leeds"),
        )

    def test_group_without_lines_is_located_under_its_factory(self):
        topology = FactoryTopology(
            portal_id="p",
            portal_url="https://x.example.com",
            factories=[
                Factory(
                    id="f-1",
                    name="Leeds",
                    shift_count=1,
                    groups=[
                        FactoryGroup(id="g-1", name="Bottling", line_count=2),
                        FactoryGroup(id="g-2", name="Canning"),
                    ],
                )
            ],
        )

        gaps = topology_gaps(topology)

        assert gaps == (TopologyGap("Lines", "No lines defined", "Leeds › Canning"),)
        assert gaps[0].to_dict() == {
            "area": "Lines",
            "issue": "No lines defined",
            "location": "Leeds › Canning",
        }

    def test_factory_gaps_come_before_line_gaps(self):
        topology = FactoryTopology(
            portal_id="p",
            portal_url="https://x.example.com",
            factories=[
                Factory(id="f-1", name="Leeds", groups=[FactoryGroup(id="g-1", name="Bottling")]),
                Factory(id="f-2", name="York", shift_count=1),
            ],
        )

        assert [gap.area for gap in topology_gaps(topology)] == [
            "Shifts",
            "Groups",
            "Lines",
        ]
