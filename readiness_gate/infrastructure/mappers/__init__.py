from .line_tree_mapper import LineTreeMapper

__all__ = ["LineTreeMapper"]
