"""Structured job data produced by the extraction pipeline."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from job_tracker_ai.config import UNABLE_TO_EXTRACT


class JobDataOutput(BaseModel):
    """Wire schema for the LLM response. Every field is required; empty string means not found."""

    model_config = ConfigDict(extra="forbid")

    company: str = Field(..., description="The company name")
    role: str = Field(..., description="The job title or role")
    salary: str = Field(..., description="Salary information if available, or empty string if not found")
    location: str = Field(
        ..., description="The physical city/location name only, or empty string if not found"
    )
    remote_status: str = Field(
        ...,
        description="Remote work arrangement: 'Remote', 'Hybrid', 'In-office', or empty string if not specified",
    )


class ExtractedJobData(BaseModel):
    """Best-effort job record. Never mutated; use model_copy(update=...) to derive a new one."""

    model_config = ConfigDict(frozen=True)

    company: str = Field(default=UNABLE_TO_EXTRACT, description="Employer name or the placeholder")
    role: str = Field(default=UNABLE_TO_EXTRACT, description="Job title or the placeholder")
    salary: str = Field(default="", description="Verbatim salary text, empty if not found")
    location: str = Field(default="", description="Place names only, empty if not found")
    remote_status: str = Field(default="", description="Remote, Hybrid, In-office or empty")

    @classmethod
    def from_output(cls, output: JobDataOutput) -> "ExtractedJobData":
        return cls(**output.model_dump())

    @classmethod
    def fallback(cls, company_hint: Optional[str] = None) -> "ExtractedJobData":
        """Placeholder record used whenever the page or the model gave us nothing usable."""
        return cls(company=company_hint or UNABLE_TO_EXTRACT)

    @property
    def is_placeholder(self) -> bool:
        return self.role == UNABLE_TO_EXTRACT
