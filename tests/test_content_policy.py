# tests/test_content_policy.py
"""Tests for disallowed-content screening."""

import pytest

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.services.content_policy import ensure_allowed, has_disallowed_content


def test_clean_text_passes(disallowed_terms) -> None:
    """Test that ordinary text and missing text are allowed."""
    assert has_disallowed_content("A perfectly ordinary title") is False
    assert has_disallowed_content(None) is False
    assert has_disallowed_content("") is False


def test_match_is_case_insensitive(disallowed_terms) -> None:
    """Test that matching ignores case."""
    assert has_disallowed_content(f"Contains {disallowed_terms.upper()}!") is True


def test_ensure_allowed_checks_every_text(disallowed_terms) -> None:
    """Test that any offending field rejects the whole request."""
    ensure_allowed("CreatePost", "fine", None)
    with pytest.raises(PostApiError) as exc_info:
        ensure_allowed("CreatePost", "fine title", f"body with {disallowed_terms}")
    assert exc_info.value.code is ErrorCode.DISALLOWED_CONTENT
    assert exc_info.value.to_payload() == {"op": "CreatePost", "error": "no_slurs"}


def test_default_pattern_allows_plain_text() -> None:
    """Test that the shipped pattern does not flag everyday words."""
    assert has_disallowed_content("Weekly discussion thread about gardening") is False
