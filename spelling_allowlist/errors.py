"""Exceptions raised while building or loading an allow-list."""

import re


class AllowListError(ValueError):
    """Base class for allow-list problems."""


class AllowListFormatError(AllowListError):
    """A serialized allow-list could not be decoded or has the wrong shape."""


class MalformedPatternError(AllowListError):
    """A pattern entry is not a valid regular expression.

    Attributes:
        index: Position of the offending entry among the pattern sources,
            or None when the pattern was built on its own.
        value: The pattern source that failed to compile.
        cause: The underlying ``re.error``.
    """

    def __init__(self, value: str, cause: re.error, index: int | None = None):
        self.index = index
        self.value = value
        self.cause = cause
        where = f"pattern #{index}" if index is not None else "pattern"
        super().__init__(f"Malformed {where} {value!r}: {cause}")
