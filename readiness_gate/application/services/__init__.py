from .readiness_service import ReadinessService
from .tab_completeness_tracker import TabCompletenessTracker

__all__ = ["ReadinessService", "TabCompletenessTracker"]
