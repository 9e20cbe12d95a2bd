# extpolicy/core/trust.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Workspace-trust requirement resolution.

Precedence, first match wins:
1. Trust disabled globally, or no native entry point: never
2. Product override value
3. Manifest `workspaceTrust.request`
4. Product default value
5. onStart
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from extpolicy.config import DEFAULT_SETTINGS, ResolverSettings
from extpolicy.core.manifest import ExtensionManifest
from extpolicy.core.types import ExtensionWorkspaceTrustValues, TrustRequirement
from extpolicy.interfaces.protocols import ProductMetadataSource, WorkspaceTrustService
from extpolicy.runtime.cache import PolicyCaches, default_caches

logger = logging.getLogger(__name__)


def get_product_workspace_trust_values(
    manifest: ExtensionManifest,
    product: ProductMetadataSource,
    caches: Optional[PolicyCaches] = None,
) -> Optional[ExtensionWorkspaceTrustValues]:
    """
    Look up the product trust values for an extension, or None.
    """
    caches = caches if caches is not None else default_caches
    return caches.product_trust_values(product).get(manifest.key)


def get_extension_workspace_trust_requirement(
    manifest: ExtensionManifest,
    product: ProductMetadataSource,
    workspace_trust: WorkspaceTrustService,
    caches: Optional[PolicyCaches] = None,
    settings: ResolverSettings = DEFAULT_SETTINGS,
) -> Any:
    """
    Decide when a workspace must be trusted before the extension activates.

    Values coming from the product or the manifest are returned as received;
    recognised ones are TrustRequirement members.

    :param manifest: The extension manifest.
    :param product: Product metadata holding override/default trust values.
    :param workspace_trust: Reports whether trust checking is enabled.
    :param caches: Cache owner, defaults to the process-wide caches.
    :param settings: Supplies the final fallback.
    """
    # Without a native entry point there is nothing that could violate trust
    if not workspace_trust.is_workspace_trust_enabled() or not manifest.main:
        return TrustRequirement.NEVER

    product_values = get_product_workspace_trust_values(manifest, product, caches)

    if product_values is not None and product_values.override_value:
        logger.debug("Trust requirement of %s overridden by product metadata", manifest.key)
        return product_values.override_value

    if manifest.trust_request is not None:
        return manifest.trust_request

    if product_values is not None and product_values.default_value:
        return product_values.default_value

    return settings.fallback_trust


class ExtensionTrustController:
    """
    Binds the trust resolver to one product source, trust service and cache
    owner.
    """

    def __init__(
        self,
        product: ProductMetadataSource,
        workspace_trust: WorkspaceTrustService,
        caches: Optional[PolicyCaches] = None,
        settings: ResolverSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._product = product
        self._workspace_trust = workspace_trust
        self._caches = caches if caches is not None else default_caches
        self._settings = settings

    def get_extension_workspace_trust_requirement(self, manifest: ExtensionManifest) -> Any:
        return get_extension_workspace_trust_requirement(
            manifest, self._product, self._workspace_trust, self._caches, self._settings
        )
