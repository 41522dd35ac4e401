import pytest

from readiness_gate.domain.feasibility.value_objects.enums import AssignmentKind
from readiness_gate.domain.shared.exceptions import LoadFailureKind, LoaderError
from readiness_gate.tests.factories import LineFactory


@pytest.mark.asyncio
class TestInMemoryFeasibilityLoader:
    """Test the dictionary-backed loader used by the engine tests."""

    async def test_inventory_is_derived_from_trees(self, loader):
        first = LineFactory.create()
        second = LineFactory.create()
        loader.add_line("proj-1", first, LineFactory.complete_tree(first, cameras=2))
        loader.add_line("proj-1", second, LineFactory.complete_tree(second, cameras=0, iot_devices=3))
        loader.add_line("proj-1", LineFactory.create())

        inventory = await loader.load_device_inventory("proj-1")

        assert len(inventory.camera_ids) == 2
        assert len(inventory.iot_device_ids) == 3

    async def test_edges_filtered_by_container(self, loader):
        loader.assign(AssignmentKind.CAMERA_SERVER, "cam-1", "srv-1")
        loader.assign(AssignmentKind.CAMERA_SERVER, "cam-2", "srv-2")

        edges = await loader.load_assignment_edges(AssignmentKind.CAMERA_SERVER, ["srv-2"])

        assert [edge.leaf_id for edge in edges] == ["cam-2"]

    async def test_failure_for_one_key(self, loader):
        loader.fail(
            "load_line_tree", LoaderError.not_found("load_line_tree", "line-2"), key="line-2"
        )

        assert await loader.load_line_tree("line-1") is None
        with pytest.raises(LoaderError) as exc_info:
            await loader.load_line_tree("line-2")

        assert exc_info.value.kind == LoadFailureKind.NOT_FOUND
        assert exc_info.value.to_dict()["details"]["entity_id"] == "line-2"

    async def test_missing_project_record(self, loader):
        with pytest.raises(LoaderError):
            await loader.load_project_scalars("proj-404")

    async def test_calls_are_recorded(self, loader):
        await loader.load_aux_counts("proj-1")
        await loader.load_factory_topology("proj-1")

        assert loader.calls == [
            ("load_aux_counts", "proj-1"),
            ("load_factory_topology", "proj-1"),
        ]
