"""Allow-list entry types.

An entry is either a literal word, matched exactly and case-sensitively, or a
regular-expression pattern describing a naming convention (CamelCase,
snake_case, ``package:`` prefixes and so on).
"""

import re
from dataclasses import dataclass, field

from loguru import logger

from spelling_allowlist.errors import MalformedPatternError


@dataclass(frozen=True)
class LiteralEntry:
    """An exact-match word."""

    word: str
    kind = "literal"

    def matches(self, token: str) -> bool:
        return token == self.word


@dataclass(frozen=True)
class PatternEntry:
    """A regular expression matching a class of technical identifiers.

    The source is compiled when the entry is created, so a broken pattern is
    reported while the list is being built rather than on first lookup.
    Matching uses ``re.search``: anchors in the source decide whether the
    match is tied to the start of the token.
    """

    source: str
    regex: re.Pattern = field(init=False, repr=False, compare=False)
    kind = "pattern"

    def __post_init__(self):
        try:
            compiled = re.compile(self.source)
        except re.error as e:
            logger.error(f"Failed to compile allow-list pattern {self.source!r}: {e}")
            raise MalformedPatternError(self.source, e) from e
        object.__setattr__(self, "regex", compiled)

    def matches(self, token: str) -> bool:
        return self.regex.search(token) is not None


AllowListEntry = LiteralEntry | PatternEntry
