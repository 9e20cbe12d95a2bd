"""
Runtime package for lookup caching.

Architecture:
- One-time initialization primitive
- Identity-keyed policy snapshots
- Process-wide default cache owner

Cross-cutting:
- Thread safety
- Explicit invalidation through reset()
"""

from .cache import PolicyCaches, default_caches, reset_caches
from .concurrency import LazySnapshot

__all__ = ["PolicyCaches", "default_caches", "reset_caches", "LazySnapshot"]
