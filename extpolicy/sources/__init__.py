"""
Sources package providing in-memory collaborators.

Architecture:
- Dictionary-backed configuration and product metadata
- Contribution-point registry with a process-wide default instance
- Fixed workspace-trust switch

Cross-cutting:
- Registry mutations are lock-protected
"""

from .registry import ExtensionPoint, ExtensionPointsRegistry, extension_points_registry
from .static import ProductMetadata, StaticConfiguration, StaticWorkspaceTrust

__all__ = [
    "ExtensionPoint",
    "ExtensionPointsRegistry",
    "extension_points_registry",
    "ProductMetadata",
    "StaticConfiguration",
    "StaticWorkspaceTrust",
]
