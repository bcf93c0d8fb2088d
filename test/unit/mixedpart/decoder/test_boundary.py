"""Tests for boundary normalization."""

import pytest

from mixedpart.core.errors import ConfigurationError, MissingBoundaryError
from mixedpart.decoder.boundary import normalize_boundary, unquote_boundary


class TestUnquoteBoundary:
    """Tests for unquote_boundary function."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ('"abc123"', "abc123"),
            ("abc123", "abc123"),
            ('"abc123', '"abc123'),
            ('abc123"', 'abc123"'),
            ('"', '"'),
            ('""', ""),
        ],
    )
    def test_strips_only_matching_pair(self, token: str, expected: str) -> None:
        """Verify only a matching pair of surrounding quotes is removed."""
        assert unquote_boundary(token) == expected


class TestNormalizeBoundary:
    """Tests for normalize_boundary function."""

    def test_quoted_token(self) -> None:
        """Verify a quoted token keeps its inner spaces."""
        boundary = normalize_boundary('"simple boundary"')
        assert boundary.value == b"simple boundary"
        assert boundary.delimiter == b"--simple boundary"

    def test_plain_token(self) -> None:
        """Verify a plain token is used as is."""
        assert normalize_boundary("abc123").value == b"abc123"

    def test_token_with_equals_sign(self) -> None:
        """Verify '=' inside the token is part of the boundary."""
        assert normalize_boundary("----=_Part_0_1").delimiter == b"------=_Part_0_1"

    def test_missing_token_is_configuration_error(self) -> None:
        """Verify an absent token raises a configuration error."""
        with pytest.raises(ConfigurationError, match="missing boundary parameter"):
            normalize_boundary(None)

    def test_empty_token_rejected(self) -> None:
        """Verify a token that is empty once unquoted is rejected."""
        with pytest.raises(MissingBoundaryError):
            normalize_boundary('""')

    def test_unencodable_token_is_configuration_error(self) -> None:
        """Verify a token the charset cannot encode raises a configuration error."""
        with pytest.raises(ConfigurationError, match="cannot be encoded"):
            normalize_boundary("boundéry", "ascii")
