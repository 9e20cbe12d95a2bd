# extpolicy/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from extpolicy.interfaces.types import (
    ConfiguredExtensionKinds,
    ExtensionPointName,
    ProductExtensionKinds,
    ProductWorkspaceTrust,
)


@runtime_checkable
class ConfigurationSource(Protocol):
    """
    Configuration protocol for type checking.

    Methods:
        get_value(key): Returns the setting stored under key, or None.

    Runtime Invariants:
    - The `remote.extensionKind` setting, when present, maps extension ids
      to a single locality class or an ordered list of them.

    Error Handling:
    - Implementations return None for unknown keys rather than raising.
    """

    def get_value(self, key: str) -> Optional[ConfiguredExtensionKinds]:
        """Return the value of a setting, or None when it is not set."""
        ...


@runtime_checkable
class ProductMetadataSource(Protocol):
    """
    Product metadata protocol for type checking.

    Attributes:
        extension_kind: Vendor locality lists keyed by extension id, or None.
        extension_workspace_trust: Vendor trust values keyed by extension id,
            or None. Each value carries an optional override and an optional
            default trust requirement.

    Runtime Invariants:
    - Product metadata is loaded once at startup and not changed afterwards.
    """

    @property
    def extension_kind(self) -> Optional[ProductExtensionKinds]:
        ...

    @property
    def extension_workspace_trust(self) -> Optional[ProductWorkspaceTrust]:
        ...


@runtime_checkable
class ExtensionPointDescriptor(Protocol):
    """
    A registered contribution point.

    Attributes:
        name: The contribution-point name used as a key under `contributes`.
        default_extension_kind: The locality the point defaults to, or None.
    """

    @property
    def name(self) -> ExtensionPointName:
        ...

    @property
    def default_extension_kind(self) -> Optional[Any]:
        ...


@runtime_checkable
class ExtensionPointRegistry(Protocol):
    """
    Extension-point registry protocol for type checking.

    Methods:
        get_extension_points(): Returns every registered contribution point.
    """

    def get_extension_points(self) -> Sequence[ExtensionPointDescriptor]:
        """Return all registered contribution points."""
        ...


@runtime_checkable
class WorkspaceTrustService(Protocol):
    """
    Workspace-trust subsystem protocol for type checking.

    Methods:
        is_workspace_trust_enabled(): Whether trust checking is on globally.
    """

    def is_workspace_trust_enabled(self) -> bool:
        """Return True when workspace trust is enforced."""
        ...
