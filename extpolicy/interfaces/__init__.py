"""
Interfaces package for the collaborators the resolvers consume.

Architecture:
- Declares read-only protocols for configuration, product metadata,
  the extension-point registry and the workspace-trust subsystem
- Declares the raw type aliases those collaborators hand over

Cross-cutting:
- Protocols are runtime_checkable so hosts can assert conformance
"""

from .protocols import (
    ConfigurationSource,
    ExtensionPointDescriptor,
    ExtensionPointRegistry,
    ProductMetadataSource,
    WorkspaceTrustService,
)

__all__ = [
    "ConfigurationSource",
    "ExtensionPointDescriptor",
    "ExtensionPointRegistry",
    "ProductMetadataSource",
    "WorkspaceTrustService",
]
