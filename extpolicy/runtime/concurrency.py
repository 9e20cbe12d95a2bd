# extpolicy/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET = object()


def get_lock() -> threading.Lock:
    """
    Provide a new lock instance to be used for synchronization.
    """
    return threading.Lock()


@contextmanager
def with_lock(lock: threading.Lock):
    """
    Acquire the given lock upon entry and release it upon exit.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


class LazySnapshot(Generic[T]):
    """
    A value built at most once by the first caller that needs it, then handed
    to every later caller unchanged until reset() is called.

    The build runs under a lock with a second check inside it, so concurrent
    first callers never build twice. Once built, reads take no lock.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: Label used in diagnostics.
        """
        self.name = name
        self._value: object = _UNSET
        self._lock = get_lock()
        self._builds = 0

    @property
    def is_built(self) -> bool:
        return self._value is not _UNSET

    @property
    def build_count(self) -> int:
        """
        Number of times the value has been built since creation.
        """
        return self._builds

    def get_or_build(self, factory: Callable[[], T]) -> T:
        """
        Return the stored value, building it with factory on first use.

        If factory raises, nothing is stored and the error propagates; the
        next call tries again.

        :param factory: Zero-argument callable producing the value.
        """
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with with_lock(self._lock):
            if self._value is _UNSET:
                self._value = factory()
                self._builds += 1
            return self._value  # type: ignore[return-value]

    def peek(self) -> Optional[T]:
        """
        Return the stored value without building it, or None.
        """
        value = self._value
        return None if value is _UNSET else value  # type: ignore[return-value]

    def reset(self) -> None:
        """
        Discard the stored value so the next access rebuilds it.
        """
        with with_lock(self._lock):
            self._value = _UNSET
