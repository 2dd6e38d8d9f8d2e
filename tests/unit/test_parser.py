"""Unit tests for the env line parser."""

import pytest

from envdesk.core.parser import EnvLineParser, extract_value
from envdesk.core.registry import VariableRegistry
from envdesk.models.env import LineKind
from envdesk.profiles.generic import generic_profile


class TestExtractValue:
    """Tests for value extraction."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("plain", "plain"),
            ("  padded  ", "padded"),
            ('"x y"', "x y"),
            ("'single'", "single"),
            ('"mismatched\'', "\"mismatched'"),
            ('"', '"'),
            ('""', ""),
            (r'"a \"b\""', r'a \"b\"'),
        ],
    )
    def test_extract(self, raw, expected):
        """Test trimming and outer quote stripping."""
        assert extract_value(raw) == expected


class TestParse:
    """Tests for EnvLineParser.parse."""

    def test_database_group(self, laravel):
        """Test that profile-defined variables get their group."""
        parser = EnvLineParser(VariableRegistry(laravel))
        variables = parser.parse("DB_HOST=localhost\nDB_PORT=3306\n", source_file=".env")

        assert [(v.name, v.raw_value) for v in variables] == [
            ("DB_HOST", "localhost"),
            ("DB_PORT", "3306"),
        ]
        assert all(v.group == "database" for v in variables)
        assert not any(v.secret for v in variables)
        assert variables[0].source_file == ".env"

    def test_skips_comments_blanks_and_malformed(self):
        """Test that only assignments become variables."""
        text = "# header\n\n   \n  # indented comment\nnot an assignment\n=novalue\nA=1\n"
        variables = EnvLineParser().parse(text)
        assert [v.name for v in variables] == ["A"]

    def test_strips_quotes(self):
        """Test that parse strips one pair of matching quotes."""
        variables = EnvLineParser().parse('Q="x y"\n')
        assert variables[0].raw_value == "x y"

    def test_keeps_duplicates(self):
        """Test that duplicated names give one record each."""
        variables = EnvLineParser().parse("A=1\nA=2\n")
        assert [v.raw_value for v in variables] == ["1", "2"]

    def test_name_is_trimmed(self):
        """Test that whitespace around the name is dropped."""
        variables = EnvLineParser().parse("  SPACED  = value\n")
        assert variables[0].name == "SPACED"
        assert variables[0].raw_value == "value"

    def test_unknown_variable_defaults(self):
        """Test group and secrecy of a variable no profile defines."""
        variables = EnvLineParser(VariableRegistry(generic_profile())).parse("STRIPE_TOKEN=x\nCOLOR=red\n")
        assert variables[0].group == "other"
        assert variables[0].secret is True
        assert variables[1].secret is False

    def test_explicit_definition_overrides_heuristic(self, laravel):
        """Test that a profile can declare a KEY variable as not secret."""
        variables = EnvLineParser(VariableRegistry(laravel)).parse("PUSHER_APP_KEY=abc\n")
        assert variables[0].secret is False
        assert variables[0].group == "pusher"

    def test_secret_display_value(self, laravel):
        """Test masking of secret values."""
        variables = EnvLineParser(VariableRegistry(laravel)).parse("DB_PASSWORD=hunter2\n")
        assert variables[0].display_value == "*******"
        assert str(variables[0]) == "DB_PASSWORD=*******"

    def test_crlf_lines(self):
        """Test that Windows line endings do not leak into values."""
        variables = EnvLineParser().parse("A=1\r\nB=2\r\n")
        assert [(v.name, v.raw_value) for v in variables] == [("A", "1"), ("B", "2")]

    def test_pure(self):
        """Test that parsing twice gives equal results."""
        parser = EnvLineParser()
        text = "A=1\nSECRET=x\n"
        assert parser.parse(text) == parser.parse(text)


class TestParseLines:
    """Tests for EnvLineParser.parse_lines."""

    def test_line_kinds(self):
        """Test classification of every physical line."""
        text = "# Section\nA=1\n\nbroken line\nB='two'\n"
        lines = EnvLineParser().parse_lines(text)

        assert [line.kind for line in lines] == [
            LineKind.COMMENT,
            LineKind.ASSIGNMENT,
            LineKind.BLANK,
            LineKind.INVALID,
            LineKind.ASSIGNMENT,
        ]
        assert [line.number for line in lines] == [1, 2, 3, 4, 5]
        assert lines[4].key == "B"
        assert lines[4].value == "two"
        assert lines[3].raw == "broken line"
