"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.1"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# LLM call bounds
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "1"))

# HTTP / fetch settings
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "20"))
HTTP_MAX_RETRIES: int = int(os.getenv("HTTP_MAX_RETRIES", "1"))

# Upper bound on cleaned page text sent to the model
PAGE_TEXT_MAX_CHARS: int = 12000

# Login-wall detection: (short page and >= N indicators) or (very short page and >= M indicators)
LOGIN_SHORT_PAGE_CHARS: int = 3000
LOGIN_SHORT_PAGE_MIN_MATCHES: int = 3
LOGIN_VERY_SHORT_PAGE_CHARS: int = 1500
LOGIN_VERY_SHORT_PAGE_MIN_MATCHES: int = 2

# Below this many characters of page text, extracted free-text fields are suspect.
# Lower than the login thresholds: some structured boards publish short, valid pages.
RELIABLE_CONTENT_MIN_CHARS: int = 800
MIN_FIELD_CHARS: int = 2  # location / salary
MIN_NAME_CHARS: int = 3  # company / role

UNABLE_TO_EXTRACT: str = "(Unable to extract, input manually)"

# Browser-like request headers for the page fetcher
BROWSER_HEADERS: dict = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Upgrade-Insecure-Requests": "1",
}

# Slugs that need more than first-letter capitalization
KNOWN_COMPANY_NAMES: dict = {
    "dowjones": "Dow Jones",
    "jpmorgan": "JPMorgan",
    "goldmansachs": "Goldman Sachs",
    "bankofamerica": "Bank of America",
    "morganstanley": "Morgan Stanley",
    "linkedin": "LinkedIn",
}
