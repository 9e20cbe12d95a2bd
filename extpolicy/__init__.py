"""extpolicy: extension execution-locality and workspace-trust policy resolution

This package decides, for an extension manifest, where the extension's code
may run (UI side, workspace side, web worker) and whether the workspace must
be trusted before the extension activates.

Responsibilities:
    - Precedence-ordered resolution over configuration, product metadata
      and the manifest itself
    - Deduction of localities from manifest shape
    - Identity-keyed, lazily built lookup snapshots

Interactions:
    - Configuration, product metadata, extension-point registry and
      workspace-trust collaborators through read-only protocols
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Each lookup snapshot is built at most once between resets
        - Reads of built snapshots take no lock

    Error Handling:
        - Resolvers never raise for well-formed manifests
        - Malformed collaborator entries are logged and skipped

    Logging:
        - Module-level loggers under the `extpolicy` namespace
        - No handlers installed by the library
"""

__version__ = "0.1.0"

from extpolicy.config import ResolverSettings
from extpolicy.core import (
    ExtensionIdentifier,
    ExtensionManifest,
    ExtensionWorkspaceTrustValues,
    ExtPolicyError,
    InvalidLocalityError,
    LocalityClass,
    LocalityList,
    TrustRequirement,
    WorkspaceTrustDeclaration,
    get_gallery_extension_id,
)
from extpolicy.core.locality import ExtensionKindController, deduce_extension_kind, is_ui_extension_point
from extpolicy.core.trust import ExtensionTrustController, get_extension_workspace_trust_requirement
from extpolicy.runtime.cache import PolicyCaches, reset_caches
from extpolicy.service import ExtensionPolicyService

__all__ = [
    "ExtPolicyError",
    "ExtensionIdentifier",
    "ExtensionKindController",
    "ExtensionManifest",
    "ExtensionPolicyService",
    "ExtensionTrustController",
    "ExtensionWorkspaceTrustValues",
    "InvalidLocalityError",
    "LocalityClass",
    "LocalityList",
    "PolicyCaches",
    "ResolverSettings",
    "TrustRequirement",
    "WorkspaceTrustDeclaration",
    "deduce_extension_kind",
    "get_extension_workspace_trust_requirement",
    "get_gallery_extension_id",
    "is_ui_extension_point",
    "reset_caches",
]
