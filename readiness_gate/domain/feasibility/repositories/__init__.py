from .data_loader import FeasibilityDataLoader

__all__ = ["FeasibilityDataLoader"]
