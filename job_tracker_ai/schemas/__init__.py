"""Schema exports."""

from .application import ApplicationDraft, ApplicationRequest
from .extracted_job import ExtractedJobData, JobDataOutput

__all__ = ["ApplicationDraft", "ApplicationRequest", "ExtractedJobData", "JobDataOutput"]
