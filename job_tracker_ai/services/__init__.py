"""Service exports."""

from .login_detector import count_login_indicators, is_login_page
from .page_fetcher import fetch_page, fetch_page_text
from .post_processor import post_process, split_location_and_remote
from .text_cleaner import clean_page_text

__all__ = [
    "count_login_indicators",
    "is_login_page",
    "fetch_page",
    "fetch_page_text",
    "post_process",
    "split_location_and_remote",
    "clean_page_text",
]
