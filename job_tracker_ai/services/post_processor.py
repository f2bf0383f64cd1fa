"""Clean up LLM-extracted job data: split location/remote, gate low-confidence values."""

import re
from typing import Optional

from job_tracker_ai.config import (
    MIN_FIELD_CHARS,
    MIN_NAME_CHARS,
    RELIABLE_CONTENT_MIN_CHARS,
    UNABLE_TO_EXTRACT,
)
from job_tracker_ai.schemas.extracted_job import ExtractedJobData
from job_tracker_ai.utils.logger import get_logger

logger = get_logger(__name__)

# Work-arrangement vocabulary -> canonical remote_status
REMOTE_STATUS_VOCABULARY = {
    "remote": "Remote",
    "hybrid": "Hybrid",
    "in-office": "In-office",
    "on-site": "In-office",
}

_ARRANGEMENT_WORD = re.compile(r"\b(remote|hybrid|in-office|on-site)\b", re.IGNORECASE)
# Token plus the brackets/dashes/separators around it, e.g. " (Remote)" or " - Hybrid"
_ARRANGEMENT_SPAN = re.compile(
    r"[\s\-–—(\[,/|:;]*\b(?:remote|hybrid|in-office|on-site)\b[\s\-–—)\],/|:;]*",
    re.IGNORECASE,
)
# Whole value only, with an optional qualifier: "Fully remote" matches, "Not remote" does not
_QUALIFIED_STATUS = re.compile(r"^(?:(?:fully|100%|full-time)\s+)?(remote|hybrid|in-office|on-site)(?:\s+only)?$")
_LEADING_SEPARATORS = " -–—),/|:;]"
_TRAILING_SEPARATORS = " -–—(,/|:;["


def canonical_remote_status(value: str) -> str:
    """Map free-text work arrangement to Remote/Hybrid/In-office; anything else -> ''."""
    key = (value or "").strip().lower()
    if key in REMOTE_STATUS_VOCABULARY:
        return REMOTE_STATUS_VOCABULARY[key]
    match = _QUALIFIED_STATUS.match(key)
    return REMOTE_STATUS_VOCABULARY[match.group(1)] if match else ""


def split_location_and_remote(location: str, remote_status: str) -> tuple[str, str]:
    """
    Move work-arrangement words out of location.
    "Spain (Remote)", "" -> "Spain", "Remote". An existing remote_status wins.
    """
    match = _ARRANGEMENT_WORD.search(location)
    if not match:
        return location, remote_status
    if not remote_status:
        remote_status = REMOTE_STATUS_VOCABULARY[match.group(1).lower()]
    cleaned = _ARRANGEMENT_SPAN.sub(" ", location)
    cleaned = re.sub(r"\s+", " ", cleaned).lstrip(_LEADING_SEPARATORS).rstrip(_TRAILING_SEPARATORS)
    return cleaned, remote_status


def _is_short(value: str, min_chars: int) -> bool:
    return len(value) < min_chars


def post_process(
    raw: ExtractedJobData,
    company_hint: Optional[str],
    page_text_length: int,
) -> ExtractedJobData:
    """
    Apply URL-hint fallback, location/remote splitting and short-content gating.
    Idempotent: running it on its own output changes nothing.
    """
    company = raw.company.strip()
    role = raw.role.strip()
    salary = raw.salary.strip()
    location = raw.location.strip()
    remote_status = canonical_remote_status(raw.remote_status)

    if (not company or company == UNABLE_TO_EXTRACT) and company_hint:
        company = company_hint
    company = company or UNABLE_TO_EXTRACT
    role = role or UNABLE_TO_EXTRACT

    if location:
        original = location
        location, remote_status = split_location_and_remote(location, remote_status)
        if location != original:
            logger.info("Cleaned location from %r to %r (remote status %r)", original, location, remote_status)

    if page_text_length < RELIABLE_CONTENT_MIN_CHARS:
        if location and _is_short(location, MIN_FIELD_CHARS):
            logger.warning("Clearing suspicious location (too short): %r", location)
            location = ""
        if salary and _is_short(salary, MIN_FIELD_CHARS):
            logger.warning("Clearing suspicious salary (too short): %r", salary)
            salary = ""
        # URL-derived company names are trusted even when short (e.g. "HP")
        if company != company_hint and _is_short(company, MIN_NAME_CHARS):
            company = company_hint or UNABLE_TO_EXTRACT
        if _is_short(role, MIN_NAME_CHARS):
            role = UNABLE_TO_EXTRACT

    return ExtractedJobData(
        company=company,
        role=role,
        salary=salary,
        location=location,
        remote_status=remote_status,
    )
