"""URL helpers: canonical job links and company names guessed from hostnames."""

import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

from job_tracker_ai.config import KNOWN_COMPANY_NAMES
from job_tracker_ai.utils.logger import get_logger

logger = get_logger(__name__)

LINKEDIN_VIEW_URL = "https://www.linkedin.com/jobs/view/{job_id}"
# LinkedIn list views that open a job in a side panel via ?currentJobId=
LINKEDIN_LIST_PATHS = ("/jobs/collections/", "/jobs/search/")

JOB_HOST_MARKERS = ("careers", "jobs")
_TLD_SUFFIX = re.compile(r"\.(com|net|org|io|co|jobs|uk|de|fr|es)$")


def is_linkedin_host(hostname: str) -> bool:
    return hostname == "linkedin.com" or hostname.endswith(".linkedin.com")


def normalize_url(url: str) -> str:
    """
    Rewrite LinkedIn collection/search links to the canonical /jobs/view/{id} form.
    Any other URL, including unparseable ones, is returned unchanged.
    """
    try:
        parsed = urlparse(url)
        hostname = (parsed.hostname or "").lower()
    except (TypeError, ValueError) as e:
        logger.warning("Could not parse URL %r for normalization: %s", url, e)
        return url
    if not is_linkedin_host(hostname):
        return url
    if not any(p in parsed.path for p in LINKEDIN_LIST_PATHS):
        return url
    job_ids = parse_qs(parsed.query).get("currentJobId") or []
    job_id = job_ids[0].strip() if job_ids else ""
    if not job_id.isdigit():
        return url
    return LINKEDIN_VIEW_URL.format(job_id=job_id)


def format_company_name(slug: str) -> str:
    """Map a hostname slug to a display name: 'dowjones' -> 'Dow Jones', 'stripe' -> 'Stripe'."""
    if slug in KNOWN_COMPANY_NAMES:
        return KNOWN_COMPANY_NAMES[slug]
    return slug[:1].upper() + slug[1:]


def company_from_url(url: str) -> Optional[str]:
    """
    Guess the company from the hostname. Handles company.jobs,
    careers.company.com / jobs.company.com and company.careers.com.
    Returns None when no pattern matches or the URL cannot be parsed.
    """
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except (TypeError, ValueError) as e:
        logger.warning("Could not parse URL %r for company hint: %s", url, e)
        return None
    if not hostname:
        return None
    if hostname.startswith("www."):
        hostname = hostname[4:]

    parts = [p for p in _TLD_SUFFIX.sub("", hostname).split(".") if p]
    if not parts:
        return None

    slug: Optional[str] = None
    if hostname.endswith(".jobs"):
        slug = parts[0]
    elif len(parts) >= 2 and parts[0] in JOB_HOST_MARKERS:
        slug = parts[1]
    elif len(parts) >= 2 and parts[1] in JOB_HOST_MARKERS:
        slug = parts[0]

    return format_company_name(slug) if slug else None
