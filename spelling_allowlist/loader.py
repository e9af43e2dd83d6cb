"""Loading and saving allow-lists kept as data files.

Supported formats, chosen by file suffix:

- ``.json``: ``{"patterns": [...], "words": [...]}``
- ``.yaml`` / ``.yml``: the same shape in YAML
- anything else: plain text, one entry per line. Blank lines and ``#``
  comments are skipped, and a line written as ``/source/`` is a pattern.
"""

import json
from pathlib import Path

import yaml
from loguru import logger

from spelling_allowlist.allow_list import AllowList
from spelling_allowlist.entries import AllowListEntry, LiteralEntry, PatternEntry
from spelling_allowlist.errors import AllowListFormatError, MalformedPatternError

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})
ALLOWED_KEYS = ("patterns", "words")


def _is_pattern_line(line: str) -> bool:
    return len(line) > 2 and line.startswith("/") and line.endswith("/")


def _fits_text_line(word: str) -> bool:
    """Check that a literal word reads back as the same literal from a text file."""
    return (
        word.splitlines() == [word]
        and word == word.strip()
        and not word.startswith("#")
        and not _is_pattern_line(word)
    )


class AllowListLoader:
    """Reads and writes allow-list files, validating entries as they load."""

    def load_from_file(self, file_path: str) -> AllowList:
        """Load an allow-list from a JSON, YAML or text file.

        Args:
            file_path: Path to the allow-list file

        Returns:
            The loaded AllowList

        Raises:
            FileNotFoundError: If the file does not exist
            AllowListFormatError: If the path is not a file, cannot be decoded, or has the
                wrong shape
            MalformedPatternError: If a pattern is not a valid regular expression

        Example:
            >>> loader = AllowListLoader()
            >>> allow_list = loader.load_from_file("allowlist.yaml")
            >>> allow_list.is_allowed("gradle")
            True
        """
        path = Path(file_path)

        if not path.exists():
            error_msg = f"Allow-list file not found: {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        if not path.is_file():
            error_msg = f"Allow-list path is not a file (it's a directory): {file_path}"
            logger.error(error_msg)
            raise AllowListFormatError(error_msg)

        logger.info(f"Loading allow-list from: {file_path}")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode file with UTF-8 encoding: {file_path}", exc_info=True)
            encoding_error_msg = f"File encoding error: {e}"
            raise AllowListFormatError(encoding_error_msg) from e

        suffix = path.suffix.lower()
        if suffix in JSON_SUFFIXES:
            allow_list = self._load_mapping(self._parse_json(text, file_path), file_path)
        elif suffix in YAML_SUFFIXES:
            allow_list = self._load_mapping(self._parse_yaml(text, file_path), file_path)
        else:
            allow_list = self._load_text(text)

        logger.info(
            f"Loaded {len(allow_list.patterns)} patterns and "
            f"{len(allow_list.words)} words from {file_path}"
        )
        return allow_list

    def _parse_json(self, text: str, file_path: str) -> object:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            error_msg = f"Invalid JSON in {file_path}: {e}"
            logger.error(error_msg)
            raise AllowListFormatError(error_msg) from e

    def _parse_yaml(self, text: str, file_path: str) -> object:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {file_path}: {e}"
            logger.error(error_msg)
            raise AllowListFormatError(error_msg) from e
        # An empty YAML document is an empty list
        return {} if data is None else data

    def _load_mapping(self, data: object, file_path: str) -> AllowList:
        if not isinstance(data, dict):
            error_msg = (
                f"Allow-list in {file_path} must be a mapping with "
                f"'patterns' and/or 'words' keys, got {type(data).__name__}"
            )
            logger.error(error_msg)
            raise AllowListFormatError(error_msg)

        unknown = sorted(set(data) - set(ALLOWED_KEYS), key=str)
        if unknown:
            error_msg = f"Unknown allow-list keys in {file_path}: {', '.join(map(str, unknown))}"
            logger.error(error_msg)
            raise AllowListFormatError(error_msg)

        values = {}
        for key in ALLOWED_KEYS:
            items = data.get(key) or []
            if not isinstance(items, list):
                error_msg = f"'{key}' in {file_path} must be a list"
                logger.error(error_msg)
                raise AllowListFormatError(error_msg)
            for index, item in enumerate(items):
                if not isinstance(item, str):
                    error_msg = (
                        f"Invalid entry at {key}[{index}] in {file_path}: {item!r}. "
                        f"Entries must be strings."
                    )
                    logger.error(error_msg)
                    raise AllowListFormatError(error_msg)
            values[key] = items

        return AllowList.from_sources(values["patterns"], values["words"])

    def _load_text(self, text: str) -> AllowList:
        entries: list[AllowListEntry] = []
        pattern_index = 0

        for line_num, line in enumerate(text.splitlines(), start=1):
            entry = line.strip()

            if not entry or entry.startswith("#"):
                continue

            if _is_pattern_line(entry):
                source = entry[1:-1]
                try:
                    entries.append(PatternEntry(source))
                except MalformedPatternError as e:
                    logger.error(f"Malformed pattern at line {line_num}: {source!r}")
                    raise MalformedPatternError(source, e.cause, index=pattern_index) from e.cause
                pattern_index += 1
            else:
                entries.append(LiteralEntry(entry))

        return AllowList(entries)

    def dump(self, allow_list: AllowList, file_path: str) -> Path:
        """Write an allow-list to disk in the format implied by the suffix.

        Args:
            allow_list: The list to write
            file_path: Destination path (.json, .yaml/.yml, or text)

        Returns:
            The path written

        Raises:
            AllowListFormatError: If a text file cannot represent an entry, such as a
                word that looks like a /pattern/ or a # comment
        """
        path = Path(file_path)
        suffix = path.suffix.lower()

        if suffix in JSON_SUFFIXES:
            content = json.dumps(allow_list.to_dict(), indent=2, ensure_ascii=False) + "\n"
        elif suffix in YAML_SUFFIXES:
            content = yaml.safe_dump(allow_list.to_dict(), sort_keys=False, allow_unicode=True)
        else:
            unfit = [word for word in allow_list.words if not _fits_text_line(word)]
            # Empty or multi-line sources cannot sit on a single /.../ line
            unfit.extend(
                f"/{source}/" for source in allow_list.patterns if source.splitlines() != [source]
            )
            if unfit:
                error_msg = (
                    f"Cannot write {', '.join(map(repr, unfit))} to text allow-list {path}; "
                    f"use a .json or .yaml file instead"
                )
                logger.error(error_msg)
                raise AllowListFormatError(error_msg)

            lines = [f"/{source}/" for source in allow_list.patterns]
            lines.extend(allow_list.words)
            content = "\n".join(lines) + "\n"

        path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(allow_list)} allow-list entries to {path}")
        return path
