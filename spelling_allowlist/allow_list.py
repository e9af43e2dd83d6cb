"""Immutable allow-list of words and patterns the spell-checker should accept.

The list is built once, validated eagerly, and then shared read-only by every
caller. Tests and projects that need a different list construct their own
``AllowList`` instead of mutating a global.
"""

from collections.abc import Iterable, Iterator
from functools import lru_cache

from loguru import logger

from spelling_allowlist.defaults import DEFAULT_PATTERNS, DEFAULT_WORDS
from spelling_allowlist.entries import AllowListEntry, LiteralEntry, PatternEntry
from spelling_allowlist.errors import MalformedPatternError


def _entry_key(entry: AllowListEntry) -> tuple[str, str]:
    if isinstance(entry, PatternEntry):
        return ("pattern", entry.source)
    return ("literal", entry.word)


class AllowList:
    """Read-only collection of allow-list entries.

    Entries keep their insertion order. Duplicate words and duplicate pattern
    sources are dropped, keeping the first occurrence.
    """

    def __init__(self, entries: Iterable[AllowListEntry] = ()):
        entries = list(entries)
        unique: dict[tuple[str, str], AllowListEntry] = {}
        for entry in entries:
            unique.setdefault(_entry_key(entry), entry)

        duplicates_removed = len(entries) - len(unique)
        if duplicates_removed > 0:
            logger.info(
                f"Removed {duplicates_removed} duplicate allow-list entries. "
                f"Unique entries: {len(unique)}"
            )
        else:
            logger.debug("No duplicates found in allow-list")

        self._entries: tuple[AllowListEntry, ...] = tuple(unique.values())

    @classmethod
    def from_sources(
        cls, patterns: Iterable[str] = (), words: Iterable[str] = ()
    ) -> "AllowList":
        """Build an allow-list from raw pattern sources and literal words.

        Every pattern is compiled before the list is returned.

        Args:
            patterns: Regular-expression sources
            words: Literal words, matched exactly

        Returns:
            A new AllowList with patterns first, then words

        Raises:
            MalformedPatternError: If a pattern source does not compile. The
                error carries the pattern's index and value.

        Example:
            >>> allow_list = AllowList.from_sources([r"^[A-Z].*"], ["gradle"])
            >>> allow_list.is_allowed("gradle")
            True
        """
        entries: list[AllowListEntry] = []
        for index, source in enumerate(patterns):
            try:
                entries.append(PatternEntry(source))
            except MalformedPatternError as e:
                raise MalformedPatternError(source, e.cause, index=index) from e.cause

        entries.extend(LiteralEntry(word) for word in words)
        return cls(entries)

    def get_entries(self) -> tuple[AllowListEntry, ...]:
        """Return every entry, patterns and literals together, in order."""
        return self._entries

    @property
    def patterns(self) -> list[str]:
        return [entry.source for entry in self._entries if isinstance(entry, PatternEntry)]

    @property
    def words(self) -> list[str]:
        return [entry.word for entry in self._entries if isinstance(entry, LiteralEntry)]

    def is_allowed(self, token: str | None) -> bool:
        """Check whether the spell-checker should accept a token.

        Literals are compared with exact, case-sensitive equality; patterns are
        searched against the token. The scan stops at the first match.

        Args:
            token: The word to check

        Returns:
            True if any entry matches, False otherwise (including for an
            empty or missing token)
        """
        if not token:
            return False

        for entry in self._entries:
            if entry.matches(token):
                logger.debug(f"Token {token!r} allowed by {entry.kind} entry {entry!r}")
                return True

        return False

    def merge(self, other: "AllowList") -> "AllowList":
        """Return a new list holding this list's entries followed by ``other``'s."""
        return AllowList(self._entries + other.get_entries())

    def to_dict(self) -> dict[str, list[str]]:
        """Serialize to ``{"patterns": [...], "words": [...]}``."""
        return {"patterns": self.patterns, "words": self.words}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AllowListEntry]:
        return iter(self._entries)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.is_allowed(token)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AllowList):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"AllowList(patterns={len(self.patterns)}, words={len(self.words)})"


@lru_cache(maxsize=1)
def default_allow_list() -> AllowList:
    """Return the allow-list shipped for the documentation site.

    The list is built once and the same instance is returned afterwards.
    """
    allow_list = AllowList.from_sources(DEFAULT_PATTERNS, DEFAULT_WORDS)
    logger.debug(f"Built default allow-list: {allow_list!r}")
    return allow_list
