# extpolicy/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class ExtPolicyError(Exception):
    """
    Base exception class for errors within the extension policy library.
    """


class InvalidLocalityError(ExtPolicyError, ValueError):
    """
    Raised when a locality class or locality list cannot be constructed from
    the given value (unknown class name, empty list, duplicated classes).

    Resolvers never let this escape: cache builders and manifest ingestion
    drop the offending entry so the lookup falls through to the next source.
    """

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class DuplicateExtensionPointError(ExtPolicyError):
    """
    Raised when a contribution point is registered twice under the same name.
    """
