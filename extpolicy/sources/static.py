# extpolicy/sources/static.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
In-memory collaborators.

Hosts that already hold their settings and product metadata as parsed
dictionaries can hand them to the resolvers through these classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from extpolicy.interfaces.types import ProductExtensionKinds, ProductWorkspaceTrust


class StaticConfiguration:
    """
    Configuration backed by a dictionary.

    Keys may be stored flat (`{"remote.extensionKind": ...}`) or as nested
    sections (`{"remote": {"extensionKind": ...}}`); flat keys win.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values = values if values is not None else {}

    def get_value(self, key: str) -> Optional[Any]:
        if key in self._values:
            return self._values[key]
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node


@dataclass
class ProductMetadata:
    """
    Vendor product metadata relevant to extension policy.
    """

    extension_kind: Optional[ProductExtensionKinds] = None
    extension_workspace_trust: Optional[ProductWorkspaceTrust] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductMetadata":
        """
        Pick the policy fields out of a parsed product.json.
        """
        return cls(
            extension_kind=data.get("extensionKind"),
            extension_workspace_trust=data.get("extensionWorkspaceTrust"),
        )


class StaticWorkspaceTrust:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def is_workspace_trust_enabled(self) -> bool:
        return self.enabled
