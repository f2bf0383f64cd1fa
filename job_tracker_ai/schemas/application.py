"""Application intake schemas: the pasted URL and the record handed to persistence."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import AnyHttpUrl, BaseModel, Field

from .extracted_job import ExtractedJobData

# Users paste job links after applying
DEFAULT_APPLICATION_STATUS = "applied"


class ApplicationRequest(BaseModel):
    """Job URL pasted by the user."""

    # AnyHttpUrl: tracking-heavy job links can exceed the 2083-char HttpUrl cap
    job_url: AnyHttpUrl = Field(..., description="Absolute http(s) URL of the job posting")


class ApplicationDraft(BaseModel):
    """Extraction result for one pasted URL, ready to be stored as a new row."""

    job_url: str = Field(..., description="Normalized job URL")
    job_data: ExtractedJobData
    is_duplicate: bool = Field(default=False, description="True if the user already tracks this URL")

    def to_record(self, applied_date: Optional[datetime] = None) -> Dict[str, Any]:
        """Flatten to row values; empty optional fields become None."""
        data = self.job_data
        return {
            "job_url": self.job_url,
            "company": data.company,
            "role": data.role,
            "salary": data.salary.strip() or None,
            "location": data.location.strip() or None,
            "remote_status": data.remote_status.strip() or None,
            "application_status": DEFAULT_APPLICATION_STATUS,
            "applied_date": applied_date or datetime.now(timezone.utc),
            "status_change_date": None,
        }
