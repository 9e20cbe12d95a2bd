# extpolicy/runtime/cache.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Identity-keyed policy lookup tables.

Architecture:
- Four snapshots: configured kinds, product kinds, product trust values,
  and the set of UI-capable contribution points
- Each snapshot is read in full from its source on first access and kept
  for the lifetime of the owning PolicyCaches instance
- Keys are canonical extension keys (see core.identity)

Design Patterns:
- Lazy Initialization: snapshots built on first use
- Memoization: later lookups never touch the source

Cross-cutting:
- Thread safety through LazySnapshot
- Malformed entries are logged and dropped
- reset() is the invalidation hook for hosts whose sources change at runtime
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from extpolicy.config import CONFIGURED_EXTENSION_KIND_KEY
from extpolicy.core.errors import InvalidLocalityError
from extpolicy.core.identity import ExtensionIdentifier
from extpolicy.core.types import ExtensionWorkspaceTrustValues, LocalityClass, LocalityList
from extpolicy.interfaces.protocols import (
    ConfigurationSource,
    ExtensionPointRegistry,
    ProductMetadataSource,
)
from extpolicy.interfaces.types import ExtensionKey, ExtensionPointName
from extpolicy.runtime.concurrency import LazySnapshot

logger = logging.getLogger(__name__)


def _index_by_key(
    label: str,
    entries: Optional[Mapping[str, Any]],
    convert: Callable[[Any], Any],
) -> Dict[ExtensionKey, Any]:
    index: Dict[ExtensionKey, Any] = {}
    for extension_id, raw in (entries or {}).items():
        try:
            index[ExtensionIdentifier.to_key(extension_id)] = convert(raw)
        except InvalidLocalityError as e:
            logger.warning("Ignoring %s entry for %s: %s", label, extension_id, e)
    logger.debug("Built %s snapshot with %d entries", label, len(index))
    return index


class PolicyCaches:
    """Owns the lazily built lookup tables shared by the resolvers.

    Each accessor takes the source it should read from. The source is only
    consulted by the first call that needs the table; later calls return the
    stored snapshot even if a different or mutated source is passed.

    Threading/Concurrency Guarantees:
    1. Each table is built at most once between resets
    2. Lock-free reads once built
    """

    def __init__(self) -> None:
        self._configured_kinds: LazySnapshot[Dict[ExtensionKey, LocalityList]] = LazySnapshot("configured_kinds")
        self._product_kinds: LazySnapshot[Dict[ExtensionKey, LocalityList]] = LazySnapshot("product_kinds")
        self._product_trust_values: LazySnapshot[Dict[ExtensionKey, ExtensionWorkspaceTrustValues]] = LazySnapshot(
            "product_trust_values"
        )
        self._ui_extension_points: LazySnapshot[FrozenSet[ExtensionPointName]] = LazySnapshot("ui_extension_points")

    def configured_kinds(
        self, configuration: ConfigurationSource, key: str = CONFIGURED_EXTENSION_KIND_KEY
    ) -> Mapping[ExtensionKey, LocalityList]:
        """Get the configured extension kinds, normalized.

        Args:
            configuration: Source of the `remote.extensionKind` setting
            key: Setting name to read

        Returns:
            Mapping from extension key to normalized LocalityList
        """
        return self._configured_kinds.get_or_build(
            lambda: _index_by_key("configured extension kind", configuration.get_value(key), LocalityList.coerce)
        )

    def product_kinds(self, product: ProductMetadataSource) -> Mapping[ExtensionKey, LocalityList]:
        """Get the product extension kinds.

        Returns:
            Mapping from extension key to LocalityList
        """
        return self._product_kinds.get_or_build(
            lambda: _index_by_key("product extension kind", product.extension_kind, LocalityList.coerce)
        )

    def product_trust_values(self, product: ProductMetadataSource) -> Mapping[ExtensionKey, ExtensionWorkspaceTrustValues]:
        """Get the product workspace trust values.

        Returns:
            Mapping from extension key to ExtensionWorkspaceTrustValues
        """
        return self._product_trust_values.get_or_build(
            lambda: _index_by_key(
                "product workspace trust", product.extension_workspace_trust, ExtensionWorkspaceTrustValues.from_value
            )
        )

    def ui_extension_points(self, registry: ExtensionPointRegistry) -> FrozenSet[ExtensionPointName]:
        """Get the names of contribution points that do not default to workspace.

        Returns:
            Frozen set of UI-capable contribution-point names
        """

        def build() -> FrozenSet[ExtensionPointName]:
            names = frozenset(
                point.name
                for point in registry.get_extension_points()
                if point.default_extension_kind != LocalityClass.WORKSPACE
            )
            logger.debug("Built ui extension point snapshot with %d entries", len(names))
            return names

        return self._ui_extension_points.get_or_build(build)

    def build_counts(self) -> Dict[str, int]:
        """Get how many times each table has been built.

        Returns:
            Dictionary of table name to build count
        """
        return {
            snapshot.name: snapshot.build_count
            for snapshot in (
                self._configured_kinds,
                self._product_kinds,
                self._product_trust_values,
                self._ui_extension_points,
            )
        }

    def reset(self) -> None:
        """Discard every table so the next lookup re-reads its source."""
        self._configured_kinds.reset()
        self._product_kinds.reset()
        self._product_trust_values.reset()
        self._ui_extension_points.reset()
        logger.debug("Policy caches reset")


# Process-wide tables used when callers do not supply their own
default_caches = PolicyCaches()


def reset_caches() -> None:
    """Reset the process-wide policy caches."""
    default_caches.reset()
