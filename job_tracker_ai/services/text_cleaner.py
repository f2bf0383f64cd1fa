"""Reduce fetched HTML to visible text for login detection and LLM extraction."""

import re

from job_tracker_ai.config import PAGE_TEXT_MAX_CHARS

_ENTITIES = {
    "&nbsp;": " ",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&amp;": "&",  # last, so "&amp;lt;" stays "&lt;"
}


def clean_page_text(html_text: str, max_chars: int = PAGE_TEXT_MAX_CHARS) -> str:
    """
    Strip scripts, styles and tags, decode common entities, collapse all
    whitespace to single spaces and truncate to max_chars.
    """
    if not html_text or not html_text.strip():
        return ""

    text = html_text

    # Remove script and style blocks (content between tags)
    text = re.sub(r"<script\b[^>]*>[\s\S]*?</script\s*>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<style\b[^>]*>[\s\S]*?</style\s*>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<noscript\b[^>]*>[\s\S]*?</noscript\s*>", " ", text, flags=re.IGNORECASE)
    text = re.sub(r"<!--[\s\S]*?-->", " ", text)

    # Strip all remaining HTML tags
    text = re.sub(r"<[^>]+>", " ", text)

    for entity, char in _ENTITIES.items():
        text = text.replace(entity, char)

    text = re.sub(r"\s+", " ", text).strip()
    return text[:max_chars]
