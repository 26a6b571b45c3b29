"""Disallowed-content scanning for user-submitted text."""
from __future__ import annotations

import re
from functools import lru_cache

from forum_stage.core.errors import ErrorCode, PostApiError
from forum_stage.core.settings import settings


@lru_cache(maxsize=4)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def has_disallowed_content(text: str | None) -> bool:
    """Return True if ``text`` matches the configured disallowed-term pattern."""
    if not text:
        return False
    return _compile(settings.slur_filter_regex).search(text) is not None


def ensure_allowed(op: str, *texts: str | None) -> None:
    """Raise ``DisallowedContent`` if any of ``texts`` contains a disallowed term."""
    if any(has_disallowed_content(text) for text in texts):
        raise PostApiError(op, ErrorCode.DISALLOWED_CONTENT)
