from .in_memory_loader import InMemoryFeasibilityLoader
from .supabase_loader import SupabaseFeasibilityLoader

__all__ = ["InMemoryFeasibilityLoader", "SupabaseFeasibilityLoader"]
