# extpolicy/core/manifest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Extension manifest value object.

Only the fields the policy resolvers read are modelled. Manifests are
immutable once built; a declared extension kind is normalized to a
LocalityList on construction so resolvers never branch on its shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from extpolicy.core.errors import InvalidLocalityError
from extpolicy.core.identity import ExtensionIdentifier, get_gallery_extension_id
from extpolicy.core.types import LocalityList, TrustRequirement
from extpolicy.interfaces.types import ExtensionId, ExtensionKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceTrustDeclaration:
    """The `workspaceTrust` block of a manifest."""

    request: Optional[Any] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkspaceTrustDeclaration":
        request = data.get("request")
        return cls(
            request=TrustRequirement.coerce(request) if request is not None else None,
            description=data.get("description"),
        )


@dataclass(frozen=True)
class ExtensionManifest:
    """Read-only view of an extension's manifest.

    Attributes:
        publisher: Publisher id
        name: Extension name
        main: Native entry point, if any
        browser: Web entry point, if any
        extension_dependencies: Ids of extensions this one depends on
        extension_pack: Ids of extensions bundled by this pack
        contributes: Contribution-point name to contribution data
        extension_kind: Declared localities, normalized, or None
        workspace_trust: Declared trust request, or None
    """

    publisher: str
    name: str
    main: Optional[str] = None
    browser: Optional[str] = None
    extension_dependencies: Tuple[ExtensionId, ...] = ()
    extension_pack: Tuple[ExtensionId, ...] = ()
    contributes: Optional[Mapping[str, Any]] = None
    extension_kind: Optional[LocalityList] = None
    workspace_trust: Optional[WorkspaceTrustDeclaration] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extension_dependencies", tuple(self.extension_dependencies or ()))
        object.__setattr__(self, "extension_pack", tuple(self.extension_pack or ()))
        if self.extension_kind is not None and not isinstance(self.extension_kind, LocalityList):
            object.__setattr__(self, "extension_kind", LocalityList.coerce(self.extension_kind))
        if isinstance(self.workspace_trust, Mapping):
            object.__setattr__(self, "workspace_trust", WorkspaceTrustDeclaration.from_dict(self.workspace_trust))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtensionManifest":
        """Build a manifest from its JSON shape.

        Fields are mapped, not validated. An `extensionKind` that names no
        known locality is dropped with a warning and treated as undeclared.

        Args:
            data: Parsed package manifest

        Returns:
            The manifest value object
        """
        publisher = data.get("publisher", "")
        name = data.get("name", "")

        extension_kind = None
        declared_kind = data.get("extensionKind")
        if declared_kind is not None:
            try:
                extension_kind = LocalityList.coerce(declared_kind)
            except InvalidLocalityError as e:
                logger.warning("Ignoring extensionKind of %s.%s: %s", publisher, name, e)

        workspace_trust = None
        declared_trust = data.get("workspaceTrust")
        if isinstance(declared_trust, Mapping):
            workspace_trust = WorkspaceTrustDeclaration.from_dict(declared_trust)

        return cls(
            publisher=publisher,
            name=name,
            main=data.get("main"),
            browser=data.get("browser"),
            extension_dependencies=tuple(data.get("extensionDependencies") or ()),
            extension_pack=tuple(data.get("extensionPack") or ()),
            contributes=data.get("contributes"),
            extension_kind=extension_kind,
            workspace_trust=workspace_trust,
        )

    @property
    def identifier(self) -> ExtensionId:
        """Get the gallery id, `publisher.name`."""
        return get_gallery_extension_id(self.publisher, self.name)

    @property
    def key(self) -> ExtensionKey:
        """Get the canonical lookup key."""
        return ExtensionIdentifier.to_key(self.identifier)

    @property
    def trust_request(self) -> Optional[Any]:
        """Get the declared `workspaceTrust.request`, or None."""
        if self.workspace_trust is None:
            return None
        return self.workspace_trust.request
