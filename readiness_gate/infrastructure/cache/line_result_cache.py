"""
Line result cache.

Caller-owned memo of line completeness results keyed by
``(line id, generation)``. The engine itself never caches; a new generation
simply misses and recomputes from scratch.
"""

from collections import OrderedDict

from readiness_gate.core.config import settings
from readiness_gate.domain.feasibility.value_objects.results import (
    LineCompletenessResult,
)

CacheKey = tuple[str, int]


class LineResultCache:
    """LRU cache of line results."""

    def __init__(self, max_size: int | None = None):
        self.max_size = max_size or settings.LINE_RESULT_CACHE_SIZE
        self._entries: OrderedDict[CacheKey, LineCompletenessResult] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, line_id: str, generation: int) -> LineCompletenessResult | None:
        key = (line_id, generation)
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def set(self, result: LineCompletenessResult, generation: int) -> None:
        key = (result.line_id, generation)
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def evict_before(self, generation: int) -> int:
        """Drop entries from older generations; returns how many were removed."""
        stale = [key for key in self._entries if key[1] < generation]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
