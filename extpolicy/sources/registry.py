# extpolicy/sources/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional

from extpolicy.core.errors import DuplicateExtensionPointError
from extpolicy.core.types import LocalityClass


@dataclass(frozen=True)
class ExtensionPoint:
    """
    A named contribution point and the locality it defaults to.
    """

    name: str
    default_extension_kind: Optional[LocalityClass] = None


class ExtensionPointsRegistry:
    """
    Holds the contribution points known to the host, in registration order.
    """

    def __init__(self, points: Iterable[ExtensionPoint] = ()) -> None:
        self._points: List[ExtensionPoint] = []
        self._lock = threading.Lock()
        for point in points:
            self.register(point)

    def register(self, point: ExtensionPoint) -> ExtensionPoint:
        """
        Add a contribution point.

        :param point: The point to add.
        :raises DuplicateExtensionPointError: If the name is already registered.
        """
        with self._lock:
            if any(p.name == point.name for p in self._points):
                raise DuplicateExtensionPointError(f"Duplicate extension point: {point.name}")
            self._points.append(point)
        return point

    def register_extension_point(
        self, name: str, default_extension_kind: Optional[LocalityClass] = None
    ) -> ExtensionPoint:
        """
        Convenience wrapper around register().
        """
        if default_extension_kind is not None:
            default_extension_kind = LocalityClass.parse(default_extension_kind)
        return self.register(ExtensionPoint(name, default_extension_kind))

    def get_extension_points(self) -> List[ExtensionPoint]:
        with self._lock:
            return list(self._points)


# Process-wide registry hosts register their contribution points with
extension_points_registry = ExtensionPointsRegistry()
