from .line_result_cache import LineResultCache

__all__ = ["LineResultCache"]
