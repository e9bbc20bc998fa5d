"""Tests for parsing requested image references."""

import pytest

from image_manifest.exceptions import ParseError
from image_manifest.manifest.tags import (
    find_bare_quote,
    parse_repo_tags,
    read_csv_rows,
    split_reference,
)


def test_parse_single_row():
    """Test parsing a single CSV row."""
    assert parse_repo_tags("a,b,c") == ["a", "b", "c"]


def test_parse_multiple_rows_preserves_order():
    """Test that row boundaries do not affect ordering."""
    assert parse_repo_tags("a,b\n,c") == ["a", "b", "c"]


def test_parse_preserves_duplicates():
    """Test that duplicate references are kept in place."""
    assert parse_repo_tags("repo/x:v1,repo/y:v1,repo/x:v1") == [
        "repo/x:v1",
        "repo/y:v1",
        "repo/x:v1",
    ]


def test_parse_quoted_fields():
    """Test that quoted fields follow CSV escaping."""
    assert parse_repo_tags('"registry.io/app:v1","weird,name:v2"') == [
        "registry.io/app:v1",
        "weird,name:v2",
    ]


def test_parse_empty_input():
    """Test that empty input yields no references."""
    assert parse_repo_tags("") == []
    assert parse_repo_tags("\n\n") == []


def test_parse_skips_blank_lines():
    """Test that blank lines between rows are ignored."""
    assert parse_repo_tags("a,b\n\nc,d\n") == ["a", "b", "c", "d"]


def test_parse_keeps_whitespace():
    """Test that field values are not trimmed."""
    assert parse_repo_tags("a, b") == ["a", " b"]


def test_parse_unterminated_quote():
    """Test that an unterminated quoted field is rejected."""
    with pytest.raises(ParseError):
        parse_repo_tags('"repo/x:v1,repo/y:v1')


def test_parse_text_after_closing_quote():
    """Test that characters after a closing quote are rejected."""
    with pytest.raises(ParseError):
        parse_repo_tags('"repo/x"v1,repo/y:v1')


def test_parse_bare_quote_in_unquoted_field():
    """Test that a quote inside an unquoted field is rejected."""
    with pytest.raises(ParseError, match='bare "'):
        parse_repo_tags('repo/x"v1,repo/y:v1')


def test_parse_quote_after_leading_space():
    """Test that a quote after a leading space is a bare quote."""
    with pytest.raises(ParseError, match='bare "'):
        parse_repo_tags('a, "b"')


def test_parse_bare_quote_line_number():
    """Test that the bare quote error names its line."""
    with pytest.raises(ParseError, match="line 2"):
        parse_repo_tags('a,b\nc,d"')


def test_parse_escaped_quotes_in_quoted_field():
    """Test that doubled quotes inside a quoted field are accepted."""
    assert parse_repo_tags('"a""b",c\n"multi\nline",d') == ['a"b', "c", "multi\nline", "d"]


def test_find_bare_quote():
    """Test locating bare quotes."""
    assert find_bare_quote('"a","b"\nc') is None
    assert find_bare_quote('"a\nb",c\nd"e') == 3
    assert find_bare_quote("") is None


def test_parse_inconsistent_field_count():
    """Test that rows must have the same number of fields."""
    with pytest.raises(ParseError, match="wrong number of fields"):
        parse_repo_tags("a,b\nc")


def test_read_csv_rows():
    """Test reading raw rows."""
    assert read_csv_rows("a,b\n,c") == [["a", "b"], ["", "c"]]


def test_split_reference():
    """Test splitting references into image and tag."""
    assert split_reference("nginx:alpine") == ("nginx", "alpine")
    assert split_reference("repo/x:v1") == ("repo/x", "v1")

    # No tag specified (should default to latest)
    assert split_reference("nginx") == ("nginx", "latest")

    # Registry ports are not tags
    assert split_reference("localhost:5000/myapp") == ("localhost:5000/myapp", "latest")
    assert split_reference("localhost:5000/myapp:v2") == ("localhost:5000/myapp", "v2")

    # Digest references are passed through whole
    assert split_reference("nginx@sha256:abc123") == ("nginx@sha256:abc123", "")

    # Edge cases
    assert split_reference("app:") == ("app", "latest")
