# extpolicy/core/identity.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Extension identity canonicalization.

Every identity-keyed lookup (configuration overrides, product defaults,
product trust values) goes through ExtensionIdentifier.to_key so that ids
differing only by letter case land on the same entry.
"""

from typing import Optional, Union

from extpolicy.interfaces.types import ExtensionId, ExtensionKey


def get_gallery_extension_id(publisher: str, name: str) -> ExtensionId:
    """Return the gallery id `publisher.name` for an extension, lower-cased."""
    return f"{publisher.lower()}.{name.lower()}"


class ExtensionIdentifier:
    """
    An extension id that remembers how it was written but compares by its
    canonical key.
    """

    __slots__ = ("value", "_key")

    def __init__(self, value: str) -> None:
        self.value = value
        self._key = value.lower()

    @staticmethod
    def to_key(identifier: Union["ExtensionIdentifier", str]) -> ExtensionKey:
        """
        Return the case-normalized lookup key for an extension id.

        :param identifier: An ExtensionIdentifier or a raw id string.
        """
        if isinstance(identifier, ExtensionIdentifier):
            return identifier._key
        return identifier.lower()

    @staticmethod
    def equals(
        a: Optional[Union["ExtensionIdentifier", str]],
        b: Optional[Union["ExtensionIdentifier", str]],
    ) -> bool:
        """
        Compare two ids case-insensitively. Two missing ids are equal.
        """
        if a is None or b is None:
            return a is b
        return ExtensionIdentifier.to_key(a) == ExtensionIdentifier.to_key(b)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (ExtensionIdentifier, str)):
            return ExtensionIdentifier.equals(self, other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ExtensionIdentifier({self.value!r})"
