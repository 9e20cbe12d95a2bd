"""
Core package providing the extension policy model and resolvers.

Architecture:
- Classification taxonomy (locality classes, trust requirements)
- Extension identity canonicalization
- Manifest value object
- Locality and trust resolvers (core.locality, core.trust)

Cross-cutting:
- Resolvers degrade to fixed defaults instead of raising
- Lookups are served from runtime.cache snapshots
"""

# core.locality and core.trust are not re-exported here: they import extpolicy.config,
# which imports core.types.
from .errors import DuplicateExtensionPointError, ExtPolicyError, InvalidLocalityError
from .identity import ExtensionIdentifier, get_gallery_extension_id
from .manifest import ExtensionManifest, WorkspaceTrustDeclaration
from .types import (
    ALL_LOCALITIES,
    ExtensionWorkspaceTrustValues,
    LocalityClass,
    LocalityList,
    TrustRequirement,
)

__all__ = [
    "ALL_LOCALITIES",
    "DuplicateExtensionPointError",
    "ExtPolicyError",
    "ExtensionIdentifier",
    "ExtensionManifest",
    "ExtensionWorkspaceTrustValues",
    "InvalidLocalityError",
    "LocalityClass",
    "LocalityList",
    "TrustRequirement",
    "WorkspaceTrustDeclaration",
    "get_gallery_extension_id",
]
