"""
Line Tree Walker

Walks Line → Position → Equipment → {Camera | IoTDevice}, running the
checklist evaluator at each level and merging the results bottom-up into gap
categories.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from readiness_gate.core.config import settings
from readiness_gate.core.observability import get_logger

from ...shared.exceptions import LoaderError
from ..entities.line import Line, LineTree
from ..repositories.data_loader import FeasibilityDataLoader
from ..rules.catalog import (
    CAMERA_RULES,
    LINE_INFORMATION,
    LINE_RULES,
    POSITIONS_AND_EQUIPMENT,
    PROCESS_FLOW,
    camera_category,
    device_presence_rule,
    position_equipment_rule,
    process_flow_rule,
    required_title_rule,
)
from ..rules.checklist import evaluate_checklist, evaluate_rule
from ..value_objects.enums import SolutionType
from ..value_objects.results import ChecklistResult, LineGap, completeness_percentage

logger = get_logger(__name__)


@dataclass(frozen=True)
class WalkResult:
    """Merged counts and categorized gaps of one line walk."""

    passed: int
    total: int
    gaps: tuple[LineGap, ...]

    @property
    def percentage(self) -> int:
        return completeness_percentage(self.passed, self.total)

    @classmethod
    def unavailable(cls) -> "WalkResult":
        """Synthetic result for a line tree that could not be loaded."""
        return cls(
            passed=0,
            total=0,
            gaps=(LineGap("Data", ("Unable to load line configuration",)),),
        )

    @classmethod
    def failed(cls) -> "WalkResult":
        """Result for a line whose evaluation raised unexpectedly."""
        return cls(
            passed=0,
            total=0,
            gaps=(LineGap("Error", ("Failed to evaluate completeness",)),),
        )


class _GapCollector:
    """Accumulates counts and keeps categories in emission order."""

    def __init__(self) -> None:
        self.result = ChecklistResult()
        self.gaps: list[LineGap] = []

    def add(self, category: str, result: ChecklistResult) -> None:
        self.result = self.result.merge(result)
        if result.gaps:
            self.gaps.append(LineGap(category, result.gaps))

    def build(self) -> WalkResult:
        return WalkResult(
            passed=self.result.passed,
            total=self.result.total,
            gaps=tuple(self.gaps),
        )


def evaluate_line_tree(
    line: Line,
    tree: LineTree,
    solution_type: SolutionType,
    required_titles: Sequence[str] = ("RLE", "OP"),
) -> WalkResult:
    """
    Evaluate a loaded line tree.

    Args:
        line: Line scalars
        tree: Loaded position/equipment/device tree
        solution_type: Solution type of the line
        required_titles: Position titles that must appear somewhere on the line

    Returns:
        Merged walk result
    """
    collector = _GapCollector()
    collector.add(LINE_INFORMATION, evaluate_checklist(line, LINE_RULES))
    collector.add(PROCESS_FLOW, evaluate_rule(process_flow_rule(), tree))

    # Position-level gaps aggregate into one category emitted after the walk
    position_result = ChecklistResult()

    for position in tree.positions:
        position_result = position_result.merge(
            evaluate_rule(position_equipment_rule(position), position)
        )

        for equipment in position.equipment:
            position_result = position_result.merge(
                evaluate_rule(device_presence_rule(equipment, solution_type), equipment)
            )

            for camera in equipment.cameras:
                collector.add(
                    camera_category(camera.display_name, equipment),
                    evaluate_checklist(camera, CAMERA_RULES),
                )

    if tree.positions:
        for title in required_titles:
            position_result = position_result.merge(
                evaluate_rule(required_title_rule(title), tree)
            )

    collector.add(POSITIONS_AND_EQUIPMENT, position_result)
    return collector.build()


class LineTreeWalker:
    """Loads a line tree through the injected loader and evaluates it."""

    def __init__(
        self,
        loader: FeasibilityDataLoader,
        required_titles: Sequence[str] | None = None,
    ):
        self._loader = loader
        self._required_titles = tuple(
            required_titles
            if required_titles is not None
            else settings.REQUIRED_POSITION_TITLES
        )

    async def walk(self, line: Line, solution_type: SolutionType) -> WalkResult:
        """
        Walk one line.

        A failed or empty tree load short-circuits to the synthetic "Data" gap;
        it is not retried here. Any other error is contained to this line as
        the "Error" gap so sibling walks are unaffected.
        """
        try:
            tree = await self._loader.load_line_tree(line.id)
        except LoaderError as e:
            logger.warning(
                "line_tree_load_failed",
                line_id=line.id,
                kind=e.kind.value,
                error=e.message,
            )
            return WalkResult.unavailable()
        except Exception:
            logger.exception("line_tree_load_error", line_id=line.id)
            return WalkResult.failed()

        if tree is None:
            logger.warning("line_tree_empty", line_id=line.id)
            return WalkResult.unavailable()

        try:
            return evaluate_line_tree(line, tree, solution_type, self._required_titles)
        except Exception:
            logger.exception("line_walk_error", line_id=line.id)
            return WalkResult.failed()
