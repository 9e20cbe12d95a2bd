# extpolicy/core/locality.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Execution-locality resolution.

Architecture:
- Resolves an ordered LocalityList for an extension manifest
- Consults configuration, then product metadata, then the manifest
- Falls back to a deduction over entry points, dependencies and
  contribution points

Responsibilities:
1. Precedence
   - The first source that answers wins outright
   - No merging across sources
2. Deduction
   - Entry points decide first
   - Dependencies and packs restrict to workspace
   - Any non UI-capable contribution point restricts to workspace
3. Predicates
   - "prefers" compares the most preferred locality
   - "can" tests membership

Cross-cutting:
- Never raises for well-formed manifests
- Lookups served from PolicyCaches snapshots
"""

from __future__ import annotations

import logging
from typing import Optional

from extpolicy.config import DEFAULT_SETTINGS, ResolverSettings
from extpolicy.core.manifest import ExtensionManifest
from extpolicy.core.types import LocalityClass, LocalityList
from extpolicy.interfaces.protocols import (
    ConfigurationSource,
    ExtensionPointRegistry,
    ProductMetadataSource,
)
from extpolicy.runtime.cache import PolicyCaches, default_caches
from extpolicy.sources.registry import extension_points_registry

logger = logging.getLogger(__name__)

_WORKSPACE_ONLY = LocalityList((LocalityClass.WORKSPACE,))
_WORKSPACE_AND_WEB = LocalityList((LocalityClass.WORKSPACE, LocalityClass.WEB))
_WEB_ONLY = LocalityList((LocalityClass.WEB,))


def is_ui_extension_point(
    extension_point: str,
    registry: Optional[ExtensionPointRegistry] = None,
    caches: Optional[PolicyCaches] = None,
) -> bool:
    """Check whether a contribution point can be served from the UI side.

    A point is UI-capable unless its registered default locality is
    workspace. Unregistered points are not UI-capable.

    Args:
        extension_point: Contribution-point name
        registry: Registry to snapshot on first use, defaults to the
            process-wide registry
        caches: Cache owner, defaults to the process-wide caches

    Returns:
        True if the point is UI-capable
    """
    caches = caches if caches is not None else default_caches
    registry = registry if registry is not None else extension_points_registry
    return extension_point in caches.ui_extension_points(registry)


def deduce_extension_kind(
    manifest: ExtensionManifest,
    registry: Optional[ExtensionPointRegistry] = None,
    caches: Optional[PolicyCaches] = None,
    settings: ResolverSettings = DEFAULT_SETTINGS,
) -> LocalityList:
    """Derive localities from the shape of a manifest alone.

    Args:
        manifest: The extension manifest
        registry: Extension-point registry used for contribution checks
        caches: Cache owner, defaults to the process-wide caches
        settings: Supplies the fallback when nothing narrows the result

    Returns:
        The deduced LocalityList
    """
    # A native entry point cannot run in a UI-local sandbox
    if manifest.main:
        if manifest.browser:
            return _WORKSPACE_AND_WEB
        return _WORKSPACE_ONLY

    if manifest.browser:
        return _WEB_ONLY

    # Dependencies and packs coordinate with extensions that may not be UI-safe
    if manifest.extension_dependencies or manifest.extension_pack:
        return _WORKSPACE_ONLY

    if manifest.contributes:
        for contribution in manifest.contributes:
            if not is_ui_extension_point(contribution, registry, caches):
                return _WORKSPACE_ONLY

    return settings.fallback_kind


class ExtensionKindController:
    """Resolves where an extension runs and where it prefers to run.

    Precedence, first match wins:
    1. Configured override (`remote.extensionKind`)
    2. Product default
    3. Manifest `extensionKind`
    4. deduce_extension_kind()
    """

    def __init__(
        self,
        product: ProductMetadataSource,
        configuration: ConfigurationSource,
        registry: Optional[ExtensionPointRegistry] = None,
        caches: Optional[PolicyCaches] = None,
        settings: ResolverSettings = DEFAULT_SETTINGS,
    ) -> None:
        """Initialize the controller.

        Args:
            product: Product metadata source
            configuration: Configuration source
            registry: Extension-point registry, defaults to the process-wide one
            caches: Cache owner, defaults to the process-wide caches
            settings: Resolver settings
        """
        self._product = product
        self._configuration = configuration
        self._registry = registry if registry is not None else extension_points_registry
        self._caches = caches if caches is not None else default_caches
        self._settings = settings

    @property
    def caches(self) -> PolicyCaches:
        """Get the cache owner used by this controller."""
        return self._caches

    def get_extension_kind(self, manifest: ExtensionManifest) -> LocalityList:
        """Resolve the ordered localities for an extension.

        Args:
            manifest: The extension manifest

        Returns:
            A non-empty LocalityList, most preferred first
        """
        key = manifest.key

        configured = self._caches.configured_kinds(self._configuration, self._settings.configuration_key).get(key)
        if configured is not None:
            logger.debug("Extension kind of %s taken from configuration", key)
            return configured

        product = self._caches.product_kinds(self._product).get(key)
        if product is not None:
            logger.debug("Extension kind of %s taken from product metadata", key)
            return product

        if manifest.extension_kind is not None:
            return manifest.extension_kind

        return deduce_extension_kind(manifest, self._registry, self._caches, self._settings)

    def prefers_execute_on_ui(self, manifest: ExtensionManifest) -> bool:
        return self.get_extension_kind(manifest).most_preferred() is LocalityClass.UI

    def prefers_execute_on_workspace(self, manifest: ExtensionManifest) -> bool:
        return self.get_extension_kind(manifest).most_preferred() is LocalityClass.WORKSPACE

    def prefers_execute_on_web(self, manifest: ExtensionManifest) -> bool:
        return self.get_extension_kind(manifest).most_preferred() is LocalityClass.WEB

    def can_execute_on_ui(self, manifest: ExtensionManifest) -> bool:
        return LocalityClass.UI in self.get_extension_kind(manifest)

    def can_execute_on_workspace(self, manifest: ExtensionManifest) -> bool:
        return LocalityClass.WORKSPACE in self.get_extension_kind(manifest)

    def can_execute_on_web(self, manifest: ExtensionManifest) -> bool:
        return LocalityClass.WEB in self.get_extension_kind(manifest)
