"""Agent exports."""

from .extractor_agent import extract_job_data, run_extractor_agent
from .intake_agent import run_intake, run_intake_sync

__all__ = ["extract_job_data", "run_extractor_agent", "run_intake", "run_intake_sync"]
