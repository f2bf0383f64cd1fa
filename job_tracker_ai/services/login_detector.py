"""Detect login/auth walls served in place of a job posting (often with a 200 status)."""

from job_tracker_ai.config import (
    LOGIN_SHORT_PAGE_CHARS,
    LOGIN_SHORT_PAGE_MIN_MATCHES,
    LOGIN_VERY_SHORT_PAGE_CHARS,
    LOGIN_VERY_SHORT_PAGE_MIN_MATCHES,
)

# Any one of these means the page is a login wall
STRONG_LOGIN_PHRASES = (
    "sign in to view",
    "log in to view",
    "authentication required",
    "please sign in",
    "you must be logged in",
    "session expired",
)

# Real postings can carry one or two of these (e.g. a "Sign in" link in the header)
WEAK_LOGIN_PHRASES = (
    "sign in",
    "log in",
    "login",
    "forgot password",
    "create account",
    "register",
    "email or phone",
    "password",
    "keep me logged in",
)


def count_login_indicators(text: str) -> int:
    """Number of distinct weak login phrases present in text (case-insensitive)."""
    lower = (text or "").lower()
    return sum(1 for phrase in WEAK_LOGIN_PHRASES if phrase in lower)


def is_login_page(text: str) -> bool:
    """True if text looks like a sign-in page rather than a job posting."""
    if not text:
        return False
    lower = text.lower()
    if any(phrase in lower for phrase in STRONG_LOGIN_PHRASES):
        return True

    matches = count_login_indicators(lower)
    length = len(text)
    return (length < LOGIN_SHORT_PAGE_CHARS and matches >= LOGIN_SHORT_PAGE_MIN_MATCHES) or (
        length < LOGIN_VERY_SHORT_PAGE_CHARS and matches >= LOGIN_VERY_SHORT_PAGE_MIN_MATCHES
    )
