"""Domain services for feasibility checks."""

from .coverage_checker import HardwareCoverageChain, check_stage, is_fully_covered
from .line_completeness_service import LineCompletenessService, resolve_solution_type
from .tab_aggregator import TabCompleteness, TabCompletenessAggregator, synchronous_flags
from .topology_checker import is_topology_complete, topology_gaps
from .tree_walker import LineTreeWalker, WalkResult, evaluate_line_tree

__all__ = [
    "HardwareCoverageChain",
    "LineCompletenessService",
    "LineTreeWalker",
    "TabCompleteness",
    "TabCompletenessAggregator",
    "WalkResult",
    "check_stage",
    "evaluate_line_tree",
    "is_fully_covered",
    "is_topology_complete",
    "resolve_solution_type",
    "synchronous_flags",
    "topology_gaps",
]
