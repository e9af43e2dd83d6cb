"""Test suite for AllowListLoader.

TEST INTEGRITY DIRECTIVE:
NEVER remove, disable, or work around a failing test without explicit user review and approval.
When a test fails: STOP, ANALYZE, DISCUSS with user, and WAIT for approval before modifying tests.
"""

import json
from pathlib import Path

import pytest
import yaml
from spelling_allowlist.allow_list import AllowList, default_allow_list
from spelling_allowlist.errors import AllowListFormatError, MalformedPatternError
from spelling_allowlist.loader import AllowListLoader

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadFixtures:
    """Tests loading the fixture files shipped with the test suite."""

    def test_load_json(self):
        """Test loading the JSON fixture, including de-duplication."""
        allow_list = AllowListLoader().load_from_file(str(FIXTURES / "allowlist.json"))

        assert allow_list.patterns == [r"^v\d+\.\d+", r"^[a-z]+\(\)$"]
        assert allow_list.words == ["melos", "pubspec", "gradle"]
        assert allow_list.is_allowed("v1.2")
        assert allow_list.is_allowed("build()")

    def test_load_yaml(self):
        """Test loading the YAML fixture."""
        allow_list = AllowListLoader().load_from_file(str(FIXTURES / "allowlist.yaml"))

        assert allow_list.patterns == [r"^v\d+\.\d+"]
        assert allow_list.words == ["melos", "pubspec", "&nbsp"]

    def test_load_text(self):
        """Test loading the text fixture: comments, blanks and /pattern/ lines."""
        allow_list = AllowListLoader().load_from_file(str(FIXTURES / "allowlist.txt"))

        assert allow_list.patterns == [r"^v\d+\.\d+"]
        assert allow_list.words == ["melos", "pubspec", "dartdoc"]

    def test_malformed_fixture_reports_index(self):
        """Test that a malformed pattern in a file is reported at load time."""
        with pytest.raises(MalformedPatternError) as exc_info:
            AllowListLoader().load_from_file(str(FIXTURES / "malformed.json"))

        assert exc_info.value.index == 1
        assert exc_info.value.value == "^(unclosed"


class TestLoadErrors:
    """Tests for invalid allow-list files."""

    def test_file_not_found(self):
        """Test that FileNotFoundError is raised for a missing file."""
        with pytest.raises(FileNotFoundError):
            AllowListLoader().load_from_file("/nonexistent/path/allowlist.json")

    def test_invalid_json(self, tmp_path):
        """Test that broken JSON raises AllowListFormatError."""
        path = tmp_path / "allowlist.json"
        path.write_text('{"words": ["melos",]')

        with pytest.raises(AllowListFormatError, match="Invalid JSON"):
            AllowListLoader().load_from_file(str(path))

    def test_invalid_yaml(self, tmp_path):
        """Test that broken YAML raises AllowListFormatError."""
        path = tmp_path / "allowlist.yaml"
        path.write_text("words: [melos\n")

        with pytest.raises(AllowListFormatError, match="Invalid YAML"):
            AllowListLoader().load_from_file(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        """Test that a bare JSON array is rejected."""
        path = tmp_path / "allowlist.json"
        path.write_text('["melos"]')

        with pytest.raises(AllowListFormatError, match="must be a mapping"):
            AllowListLoader().load_from_file(str(path))

    def test_unknown_keys_rejected(self, tmp_path):
        """Test that misspelled section names are not silently ignored."""
        path = tmp_path / "allowlist.json"
        path.write_text('{"word": ["melos"]}')

        with pytest.raises(AllowListFormatError, match="Unknown allow-list keys"):
            AllowListLoader().load_from_file(str(path))

    def test_unknown_keys_of_mixed_types_rejected(self, tmp_path):
        """Test that YAML keys of different types still give a format error."""
        path = tmp_path / "allowlist.yaml"
        path.write_text("1: x\nfoo: y\nwords: [melos]\n")

        with pytest.raises(AllowListFormatError, match="Unknown allow-list keys in .*: 1, foo"):
            AllowListLoader().load_from_file(str(path))

    def test_directory_rejected(self, tmp_path):
        """Test that a directory path gives a format error instead of an OS error."""
        with pytest.raises(AllowListFormatError, match="not a file"):
            AllowListLoader().load_from_file(str(tmp_path))

    def test_section_must_be_list(self, tmp_path):
        """Test that a section holding a single string is rejected."""
        path = tmp_path / "allowlist.yml"
        path.write_text("words: melos\n")

        with pytest.raises(AllowListFormatError, match="must be a list"):
            AllowListLoader().load_from_file(str(path))

    def test_non_string_entry_rejected(self, tmp_path):
        """Test that each entry must be a string."""
        path = tmp_path / "allowlist.json"
        path.write_text('{"words": ["melos", 42]}')

        with pytest.raises(AllowListFormatError, match=r"words\[1\]"):
            AllowListLoader().load_from_file(str(path))

    def test_encoding_error(self, tmp_path):
        """Test that a file that is not UTF-8 raises AllowListFormatError."""
        path = tmp_path / "allowlist.txt"
        path.write_bytes(b"melos\n\xff\xfe\n")

        with pytest.raises(AllowListFormatError, match="encoding"):
            AllowListLoader().load_from_file(str(path))

    def test_malformed_pattern_in_text_counts_patterns_only(self, tmp_path):
        """Test that the reported index counts pattern lines, not all lines."""
        path = tmp_path / "allowlist.txt"
        path.write_text("melos\n/^v\\d+/\npubspec\n/[a-/\n")

        with pytest.raises(MalformedPatternError) as exc_info:
            AllowListLoader().load_from_file(str(path))

        assert exc_info.value.index == 1
        assert exc_info.value.value == "[a-"


class TestLoadEdgeCases:
    """Tests for unusual but valid files."""

    def test_empty_yaml_is_empty_list(self, tmp_path):
        """Test that an empty YAML document gives an empty list."""
        path = tmp_path / "allowlist.yaml"
        path.write_text("")

        allow_list = AllowListLoader().load_from_file(str(path))

        assert len(allow_list) == 0

    def test_null_section_treated_as_empty(self, tmp_path):
        """Test that a section with no items is allowed."""
        path = tmp_path / "allowlist.yaml"
        path.write_text("patterns:\nwords:\n  - melos\n")

        allow_list = AllowListLoader().load_from_file(str(path))

        assert allow_list.patterns == []
        assert allow_list.words == ["melos"]

    def test_slash_alone_is_a_literal(self, tmp_path):
        """Test that a short slash-wrapped line is not mistaken for a pattern."""
        path = tmp_path / "allowlist.txt"
        path.write_text("/\n//\n")

        allow_list = AllowListLoader().load_from_file(str(path))

        assert allow_list.patterns == []
        assert allow_list.words == ["/", "//"]


class TestDump:
    """Tests for AllowListLoader.dump()."""

    def test_dump_json_shape(self, tmp_path):
        """Test that JSON output uses the patterns/words shape."""
        allow_list = AllowList.from_sources([r"^package:.*"], ["&raquo", "melos"])
        path = tmp_path / "out.json"

        AllowListLoader().dump(allow_list, str(path))

        assert json.loads(path.read_text(encoding="utf-8")) == {
            "patterns": [r"^package:.*"],
            "words": ["&raquo", "melos"],
        }

    def test_dump_yaml_shape(self, tmp_path):
        """Test that YAML output keeps patterns before words."""
        allow_list = AllowList.from_sources([r"^[A-Z].*"], ["&raquo"])
        path = tmp_path / "out.yaml"

        AllowListLoader().dump(allow_list, str(path))

        content = path.read_text(encoding="utf-8")
        assert content.index("patterns") < content.index("words")
        assert yaml.safe_load(content) == allow_list.to_dict()

    def test_dump_text_wraps_patterns_in_slashes(self, tmp_path):
        """Test the plain-text layout."""
        allow_list = AllowList.from_sources([r"^v\d+"], ["melos"])
        path = tmp_path / "out.txt"

        AllowListLoader().dump(allow_list, str(path))

        assert path.read_text(encoding="utf-8") == "/^v\\d+/\nmelos\n"

    @pytest.mark.parametrize("name", ["defaults.json", "defaults.yaml", "defaults.txt"])
    def test_default_list_survives_dump_and_load(self, tmp_path, name):
        """Test that the shipped list can be written and read back unchanged."""
        loader = AllowListLoader()
        path = tmp_path / name

        loader.dump(default_allow_list(), str(path))

        assert loader.load_from_file(str(path)) == default_allow_list()

    @pytest.mark.parametrize(
        "word",
        ["/api/", "#hash", " padded", "trailing\t", "two\nlines", ""],
    )
    def test_dump_text_rejects_words_it_cannot_round_trip(self, tmp_path, word):
        """Test that text output refuses words that would read back differently."""
        allow_list = AllowList.from_sources(words=[word, "melos"])
        path = tmp_path / "out.txt"

        with pytest.raises(AllowListFormatError, match="Cannot write"):
            AllowListLoader().dump(allow_list, str(path))

        assert not path.exists()

    def test_dump_text_rejects_empty_pattern(self, tmp_path):
        """Test that an empty pattern source is not written as a literal //."""
        allow_list = AllowList.from_sources(patterns=[""])

        with pytest.raises(AllowListFormatError, match="Cannot write"):
            AllowListLoader().dump(allow_list, str(tmp_path / "out.txt"))

    def test_words_unfit_for_text_survive_json(self, tmp_path):
        """Test that the same words round-trip through JSON unchanged."""
        loader = AllowListLoader()
        allow_list = AllowList.from_sources(words=["/api/", "#hash", " padded", "melos"])
        path = tmp_path / "out.json"

        loader.dump(allow_list, str(path))
        loaded = loader.load_from_file(str(path))

        assert loaded == allow_list
        assert not loaded.is_allowed("rapid")
