# extpolicy/service.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Extension policy facade.

Architecture:
- Wires the locality and trust controllers to one PolicyCaches instance
- Exposes every policy query through a single object

Design Patterns:
- Facade Pattern: one entry point for hosts
- Dependency Injection: collaborators passed in, never looked up

Cross-cutting:
- reset_caches() invalidates every snapshot this service reads
"""

from __future__ import annotations

from typing import Any, Optional

from extpolicy.config import DEFAULT_SETTINGS, ResolverSettings
from extpolicy.core.locality import ExtensionKindController
from extpolicy.core.manifest import ExtensionManifest
from extpolicy.core.trust import ExtensionTrustController
from extpolicy.core.types import LocalityList
from extpolicy.interfaces.protocols import (
    ConfigurationSource,
    ExtensionPointRegistry,
    ProductMetadataSource,
    WorkspaceTrustService,
)
from extpolicy.runtime.cache import PolicyCaches


class ExtensionPolicyService:
    """Answers where an extension runs and whether it needs a trusted workspace.

    Unlike the module-level functions, a service owns its caches unless one
    is passed in, so separate services never share snapshots.
    """

    def __init__(
        self,
        configuration: ConfigurationSource,
        product: ProductMetadataSource,
        workspace_trust: WorkspaceTrustService,
        registry: Optional[ExtensionPointRegistry] = None,
        caches: Optional[PolicyCaches] = None,
        settings: ResolverSettings = DEFAULT_SETTINGS,
    ) -> None:
        """Initialize the service.

        Args:
            configuration: Configuration source
            product: Product metadata source
            workspace_trust: Workspace-trust subsystem
            registry: Extension-point registry, defaults to the process-wide one
            caches: Cache owner, a fresh one by default
            settings: Resolver settings
        """
        self._caches = caches if caches is not None else PolicyCaches()
        self._kinds = ExtensionKindController(product, configuration, registry, self._caches, settings)
        self._trust = ExtensionTrustController(product, workspace_trust, self._caches, settings)

    @property
    def caches(self) -> PolicyCaches:
        return self._caches

    def get_extension_kind(self, manifest: ExtensionManifest) -> LocalityList:
        return self._kinds.get_extension_kind(manifest)

    def prefers_execute_on_ui(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.prefers_execute_on_ui(manifest)

    def prefers_execute_on_workspace(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.prefers_execute_on_workspace(manifest)

    def prefers_execute_on_web(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.prefers_execute_on_web(manifest)

    def can_execute_on_ui(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.can_execute_on_ui(manifest)

    def can_execute_on_workspace(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.can_execute_on_workspace(manifest)

    def can_execute_on_web(self, manifest: ExtensionManifest) -> bool:
        return self._kinds.can_execute_on_web(manifest)

    def get_extension_workspace_trust_requirement(self, manifest: ExtensionManifest) -> Any:
        return self._trust.get_extension_workspace_trust_requirement(manifest)

    def reset_caches(self) -> None:
        """Discard all snapshots so the next lookups re-read their sources."""
        self._caches.reset()
