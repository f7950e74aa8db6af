"""Tests for glob key patterns."""

from __future__ import annotations

import pytest

from flixor_infra.cache.patterns import compile_glob, matches


@pytest.mark.unit
class TestCompileGlob:
    """Test glob to regex translation."""

    def test_star_matches_any_run(self) -> None:
        """A trailing star matches any suffix, including empty."""
        regex = compile_glob("tmdb:*")
        assert matches(regex, "tmdb:")
        assert matches(regex, "tmdb:/movie/550?language=en-US")

    def test_match_is_anchored(self) -> None:
        """Patterns must match the whole key."""
        regex = compile_glob("movie:*")
        assert not matches(regex, "tmdb:movie:1")
        assert not matches(compile_glob("tmdb:movie"), "tmdb:movie:1")

    def test_dot_is_literal(self) -> None:
        """'.' matches only a dot."""
        regex = compile_glob("a.b")
        assert matches(regex, "a.b")
        assert not matches(regex, "axb")

    @pytest.mark.parametrize("special", ["?", "[", "]", "(", "+", "$", "^", "|", "\\"])
    def test_regex_metacharacters_are_literal(self, special: str) -> None:
        """Every non-star character matches itself."""
        regex = compile_glob(f"k{special}*")
        assert matches(regex, f"k{special}tail")
        assert not matches(regex, "kxtail")

    def test_star_in_middle(self) -> None:
        """Stars can appear anywhere in the pattern."""
        regex = compile_glob("tmdb:*/credits")
        assert matches(regex, "tmdb:/movie/1/credits")
        assert not matches(regex, "tmdb:/movie/1")

    def test_star_spans_newlines(self) -> None:
        """Keys containing newlines still match a star."""
        assert matches(compile_glob("x*"), "x\ny")
