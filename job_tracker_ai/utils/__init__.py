"""Utility exports."""

from .helpers import company_from_url, format_company_name, normalize_url
from .logger import get_logger

__all__ = [
    "get_logger",
    "company_from_url",
    "format_company_name",
    "normalize_url",
]
