"""
Tests for the env file parser and formatter.
"""
import pytest

from envcrypto.core.file_ops.parser import format_env, parse_env


class TestParseEnv:

    def test_mixed_valid_and_malformed_lines(self):
        text = "DB_HOST=\"localhost\"\nAPI_KEY='k'\nEMPTY=\"\"\nBAD LINE\n=NOKEY\nOK=\n"
        assert parse_env(text) == {
            "DB_HOST": "localhost",
            "API_KEY": "k",
            "EMPTY": "",
            "OK": "",
        }

    def test_comments_and_blank_lines_only(self):
        text = "\n# This is a comment\n   # Another comment\n   \n# Yet another\n\n"
        assert parse_env(text) == {}

    def test_empty_text(self):
        assert parse_env("") == {}

    def test_quoted_values_keep_interior(self):
        text = (
            "SINGLE_QUOTED_SPACE=' value with spaces '\n"
            "DOUBLE_QUOTED_SPECIAL=\"value with $pecial chars!\"\n"
            "UNQUOTED_VAR=noquotes\n"
        )
        assert parse_env(text) == {
            "SINGLE_QUOTED_SPACE": " value with spaces ",
            "DOUBLE_QUOTED_SPECIAL": "value with $pecial chars!",
            "UNQUOTED_VAR": "noquotes",
        }

    def test_only_outer_quotes_removed(self):
        assert parse_env('NESTED="a\\"b"') == {"NESTED": 'a\\"b'}

    @pytest.mark.parametrize("raw,expected", [
        ('"', '"'),
        ("'abc\"", "'abc\""),
        ('"abc', '"abc'),
        ("abc'", "abc'"),
    ])
    def test_unmatched_quotes_kept(self, raw, expected):
        assert parse_env(f"VALUE={raw}") == {"VALUE": expected}

    def test_whitespace_around_equals(self):
        assert parse_env("  SPACED   =   value") == {"SPACED": "value"}

    def test_value_may_contain_equals(self):
        assert parse_env("URL=postgres://u:p@h/db?a=b") == {"URL": "postgres://u:p@h/db?a=b"}

    def test_dotted_and_dashed_keys(self):
        assert parse_env("app.name=x\nsome-key=y") == {"app.name": "x", "some-key": "y"}

    def test_duplicate_keys_last_wins(self):
        assert parse_env("A=1\nB=2\nA=3") == {"A": "3", "B": "2"}

    def test_crlf_line_endings(self):
        assert parse_env("A=1\r\nB=\"two\"\r\n") == {"A": "1", "B": "two"}

    def test_key_with_space_is_dropped(self):
        assert parse_env("MY VAR=1\nGOOD=2") == {"GOOD": "2"}

    def test_malformed_lines_do_not_abort(self):
        text = (
            "VALID_VAR=value1\n"
            "malformed line without equals\n"
            "ANOTHER_VALID=value2\n"
            "just text\n"
            "KEY_WITHOUT_VALUE=\n"
            "=VALUE_WITHOUT_KEY\n"
        )
        assert parse_env(text) == {
            "VALID_VAR": "value1",
            "ANOTHER_VALID": "value2",
            "KEY_WITHOUT_VALUE": "",
        }


class TestFormatEnv:

    def test_plain_values(self):
        assert format_env({"A": "1", "B": "abc"}) == "A=1\nB=abc\n"

    @pytest.mark.parametrize("value", ["hello world", "a,b", "x;y", "tab\there"])
    def test_values_needing_quotes(self, value):
        assert format_env({"K": value}) == f'K="{value}"\n'

    def test_empty_mapping(self):
        assert format_env({}) == ""

    def test_empty_value(self):
        assert format_env({"EMPTY": ""}) == "EMPTY=\n"

    def test_formatted_output_parses_back(self):
        variables = {"HOST": "localhost", "LIST": "a, b", "EMPTY": ""}
        assert parse_env(format_env(variables)) == variables
