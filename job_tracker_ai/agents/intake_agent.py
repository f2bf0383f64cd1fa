"""Intake Agent: validate a pasted job URL, flag duplicates, run extraction."""

import asyncio
from typing import Iterable, Optional

from openai import AsyncOpenAI

from job_tracker_ai.agents.extractor_agent import run_extractor_agent
from job_tracker_ai.schemas.application import ApplicationDraft, ApplicationRequest
from job_tracker_ai.utils.helpers import normalize_url
from job_tracker_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def run_intake(
    job_url: str,
    known_urls: Iterable[str] = (),
    client: Optional[AsyncOpenAI] = None,
) -> ApplicationDraft:
    """
    Build an ApplicationDraft for a pasted URL. Raises pydantic ValidationError
    if job_url is not an http(s) URL; extraction itself never raises.
    A duplicate is still extracted: the user may apply to the same job twice.
    """
    # Validate only; keep the pasted text as the key so it matches stored rows
    job_url = job_url.strip()
    ApplicationRequest(job_url=job_url)
    normalized = normalize_url(job_url)
    # Stored URLs may predate normalization
    known = {normalize_url(u) for u in known_urls}
    is_duplicate = normalized in known
    if is_duplicate:
        logger.info("URL already tracked: %s", normalized)

    job_data = await run_extractor_agent(normalized, client=client)
    return ApplicationDraft(job_url=normalized, job_data=job_data, is_duplicate=is_duplicate)


def run_intake_sync(
    job_url: str,
    known_urls: Iterable[str] = (),
) -> ApplicationDraft:
    """
    Run run_intake on a fresh event loop; safe to call from sync context (e.g. Streamlit).
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(run_intake(job_url, known_urls))
    finally:
        loop.close()
