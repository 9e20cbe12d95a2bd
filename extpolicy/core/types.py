# extpolicy/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Type definitions and enums for extension policy resolution.

This module contains the classification taxonomy shared by the locality
and trust resolvers. It has no runtime dependencies on other extpolicy
modules apart from the error hierarchy.

Design:
- LocalityClass and TrustRequirement are str-valued enums so that values
  read from JSON compare equal to their members
- LocalityList is an immutable ordered sequence; the first element is the
  most preferred locality
- Normalization of single-valued declarations happens once, at ingestion
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from extpolicy.core.errors import InvalidLocalityError


class LocalityClass(str, Enum):
    """Defines where extension code may execute.

    Used to express both what an extension supports and, through ordering
    inside a LocalityList, what it prefers.
    """

    UI = "ui"  # Same process/machine as the user interface
    WORKSPACE = "workspace"  # Wherever the workspace resources live, possibly remote
    WEB = "web"  # Browser-hosted extension host

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union["LocalityClass", str]) -> "LocalityClass":
        """Convert a raw value into a LocalityClass.

        Args:
            value: A LocalityClass member or its string value

        Returns:
            The matching LocalityClass

        Raises:
            InvalidLocalityError: If the value names no locality class
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidLocalityError(f"Unknown locality class: {value!r}", value) from None


class TrustRequirement(str, Enum):
    """Defines when a workspace must be trusted before an extension activates."""

    NEVER = "never"  # Never requires trust
    ON_START = "onStart"  # Trust required before any activation
    ON_DEMAND = "onDemand"  # Trust required only when the extension asks at runtime

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Map a raw value onto a TrustRequirement member when one matches.

        Values are opaque to the resolvers: anything that is not a member
        value is returned unchanged.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


class LocalityList(Sequence):
    """Non-empty ordered sequence of distinct locality classes.

    Order encodes preference. The first element is the most preferred
    locality and is exposed through most_preferred().

    Instances are immutable and hashable, and compare equal to any list or
    tuple holding the same classes (or their string values) in the same order.
    """

    __slots__ = ("_classes",)

    def __init__(self, classes: Iterable[Union[LocalityClass, str]]) -> None:
        """Initialize from an ordered iterable of locality classes.

        Args:
            classes: Locality classes in preference order

        Raises:
            InvalidLocalityError: If empty, duplicated, or holding unknown classes
        """
        parsed = tuple(LocalityClass.parse(c) for c in classes)
        if not parsed:
            raise InvalidLocalityError("A locality list must not be empty", parsed)
        if len(set(parsed)) != len(parsed):
            raise InvalidLocalityError(f"Duplicate locality classes in {list(map(str, parsed))}", parsed)
        self._classes: Tuple[LocalityClass, ...] = parsed

    @classmethod
    def coerce(cls, value: Any) -> "LocalityList":
        """Normalize a declared extension kind into a LocalityList.

        A single `ui` expands to [ui, workspace]; any other single class X
        expands to [X]. Sequences keep their order; repeated classes after
        the first occurrence are dropped.

        Args:
            value: A LocalityList, a single class, or a sequence of classes

        Returns:
            The normalized LocalityList

        Raises:
            InvalidLocalityError: If the value cannot be normalized
        """
        if isinstance(value, LocalityList):
            return value
        if isinstance(value, str):
            locality = LocalityClass.parse(value)
            if locality is LocalityClass.UI:
                return cls((LocalityClass.UI, LocalityClass.WORKSPACE))
            return cls((locality,))
        if isinstance(value, Sequence):
            ordered = []
            for item in value:
                locality = LocalityClass.parse(item)
                if locality not in ordered:
                    ordered.append(locality)
            return cls(ordered)
        raise InvalidLocalityError(f"Cannot interpret {value!r} as an extension kind", value)

    def most_preferred(self) -> LocalityClass:
        """Return the locality the extension prefers to run in."""
        return self._classes[0]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return list(self._classes[index])
        return self._classes[index]

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[LocalityClass]:
        return iter(self._classes)

    def __contains__(self, item: object) -> bool:
        return item in self._classes

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LocalityList):
            return self._classes == other._classes
        if isinstance(other, (list, tuple)):
            return self._classes == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._classes)

    def __repr__(self) -> str:
        return f"LocalityList({[c.value for c in self._classes]!r})"

    def to_list(self) -> list:
        """Return the classes as a list of plain strings."""
        return [c.value for c in self._classes]


@dataclass(frozen=True)
class ExtensionWorkspaceTrustValues:
    """Product-supplied trust values for one extension.

    Either field may be absent. Values are kept as received.
    """

    override_value: Optional[Any] = None
    default_value: Optional[Any] = None

    @classmethod
    def from_value(cls, value: Any) -> "ExtensionWorkspaceTrustValues":
        """Build from an instance or from the product metadata mapping shape.

        Both the camelCase keys of product metadata (`overrideValue`,
        `defaultValue`) and snake_case keys are accepted.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            override = value.get("overrideValue", value.get("override_value"))
            default = value.get("defaultValue", value.get("default_value"))
            return cls(
                override_value=TrustRequirement.coerce(override) if override is not None else None,
                default_value=TrustRequirement.coerce(default) if default is not None else None,
            )
        return cls(
            override_value=getattr(value, "override_value", None),
            default_value=getattr(value, "default_value", None),
        )


# Returned when no source declares or implies anything narrower
ALL_LOCALITIES = LocalityList((LocalityClass.UI, LocalityClass.WORKSPACE, LocalityClass.WEB))
