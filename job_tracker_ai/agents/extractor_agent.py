"""Extractor Agent: fetch the posting, screen login walls, LLM extraction, post-process."""

import json
import re
from typing import Any, Optional
from urllib.parse import urlparse

from openai import AsyncOpenAI
from pydantic import ValidationError

from job_tracker_ai.config import (
    LLM_MAX_RETRIES,
    LLM_TEMPERATURE,
    LLM_TIMEOUT_SECONDS,
    MODEL_NAME,
    OPENAI_API_KEY,
)
from job_tracker_ai.schemas.extracted_job import ExtractedJobData, JobDataOutput
from job_tracker_ai.services.login_detector import count_login_indicators, is_login_page
from job_tracker_ai.services.page_fetcher import fetch_page_text
from job_tracker_ai.services.post_processor import post_process
from job_tracker_ai.utils.helpers import company_from_url, is_linkedin_host, normalize_url
from job_tracker_ai.utils.logger import get_logger

logger = get_logger(__name__)

EXTRACTION_SYSTEM_PROMPT = """You extract job application information from the text of a job posting page.
Use ONLY information that is explicitly present in the page content. Never make up, guess or infer a value.

Fields:
1. company - The employer/company name. If a company hint is given, use it only when the page does not clearly state the company.
2. role - The position title (e.g. "Senior Software Engineer", "Product Manager").
   Do NOT use generic site navigation text such as "Join Our Team" or "Careers".
3. salary - Preserve the exact original format, currency and range (e.g. "$80k-$100k", "€70,000"). Empty string if not found.
4. location - The job location(s):
   - Extract ONLY from job posting metadata (e.g. "Location: United States"), the job description or the requirements section.
   - Do NOT extract from site navigation menus, page headers, footer copyright text or user profile info.
   - 1 location: return the city OR country name as written (e.g. "San Francisco", "Spain", "United States").
   - 2-3 locations: join them with " / " (e.g. "London / Paris / Berlin").
   - More than 3 locations: return "Multiple".
   - Place names only, not country codes ("ESP | Barcelona" -> "Barcelona").
   - Never put a work arrangement (Remote/Hybrid/In-office) in location. "Spain (Remote)" -> location "Spain", remote_status "Remote".
   - Empty string if the location is not stated in the posting.
5. remote_status - Work arrangement only: "Remote", "Hybrid", "In-office" (also for "On-site"), or empty string if not specified.

If the content seems incomplete, minimal, or looks like a login page ("sign in", "log in", "forgot password"),
return empty strings for salary, location and remote_status.
Every field is required: use an empty string for anything that is not present."""

LINKEDIN_WARNING = (
    "WARNING: This is a LinkedIn URL. The content may be incomplete due to authentication walls. "
    "Only extract location if it clearly comes from the job posting itself, not navigation, footer or metadata text."
)


def _response_format() -> dict[str, Any]:
    """Strict JSON schema for structured output; all five fields required."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "job_data",
            "strict": True,
            "schema": JobDataOutput.model_json_schema(),
        },
    }


def _is_linkedin_url(url: str) -> bool:
    try:
        hostname = (urlparse(url).hostname or "").lower()
    except ValueError:
        return False
    return is_linkedin_host(hostname)


def build_user_prompt(url: str, page_text: str, company_hint: Optional[str]) -> str:
    """User message: URL, optional hint and LinkedIn caution, then the page content."""
    lines = [f"URL: {url}"]
    if company_hint:
        lines.append(f'HINT: The URL domain suggests this might be a "{company_hint}" job posting.')
    if _is_linkedin_url(url):
        lines.append(LINKEDIN_WARNING)
    lines.append("")
    lines.append("PAGE CONTENT:")
    lines.append(page_text)
    return "\n".join(lines)


def _parse_llm_json(text: str) -> Optional[dict]:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


async def extract_job_data(
    client: Optional[AsyncOpenAI],
    url: str,
    page_text: str,
    company_hint: Optional[str],
) -> ExtractedJobData:
    """
    One constrained LLM call over the page text. Empty page text skips the call.
    Any API, parsing or validation failure yields the same placeholder record.
    """
    if not page_text:
        logger.warning("No usable page content for %s, using URL-based fallback", url)
        return ExtractedJobData.fallback(company_hint)

    logger.info("Extracting job data from %s chars of content...", len(page_text))
    try:
        response = await client.chat.completions.create(
            model=MODEL_NAME,
            messages=[
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(url, page_text, company_hint)},
            ],
            response_format=_response_format(),
            temperature=LLM_TEMPERATURE,
        )
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            logger.warning("Empty LLM response for %s", url)
            return ExtractedJobData.fallback(company_hint)
        parsed = _parse_llm_json(choice.message.content)
        if parsed is None:
            logger.warning("LLM returned non-JSON output for %s", url)
            return ExtractedJobData.fallback(company_hint)
        output = JobDataOutput.model_validate(parsed)
    except ValidationError as e:
        logger.warning("LLM output validation failed for %s: %s", url, e)
        return ExtractedJobData.fallback(company_hint)
    except Exception as e:
        logger.exception("AI extraction failed for %s: %s", url, e)
        return ExtractedJobData.fallback(company_hint)

    logger.info("Extracted data for %s: %s", url, output.model_dump())
    return ExtractedJobData.from_output(output)


def build_client() -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=OPENAI_API_KEY,
        timeout=LLM_TIMEOUT_SECONDS,
        max_retries=LLM_MAX_RETRIES,
    )


async def run_extractor_agent(
    url: str,
    client: Optional[AsyncOpenAI] = None,
) -> ExtractedJobData:
    """
    Run the Extractor Agent for one pasted URL: normalize, fetch, drop login
    walls, LLM extraction with the URL company hint, post-process.
    Never raises; failures degrade to placeholder values.
    """
    url = normalize_url(url)
    company_hint = company_from_url(url)

    page_text = await fetch_page_text(url)
    if page_text and is_login_page(page_text):
        logger.warning(
            "Detected login page for URL: %s (%s chars, %s login indicators)",
            url,
            len(page_text),
            count_login_indicators(page_text),
        )
        page_text = ""

    if page_text and client is None:
        if not OPENAI_API_KEY:
            logger.error("OPENAI_API_KEY is not set; cannot run extractor")
            page_text = ""
        else:
            client = build_client()

    raw = await extract_job_data(client, url, page_text, company_hint)
    job = post_process(raw, company_hint, len(page_text))
    logger.info(
        "Extractor Agent finished: url=%s company=%r role=%r placeholder=%s",
        url,
        job.company,
        job.role,
        job.is_placeholder,
    )
    return job
