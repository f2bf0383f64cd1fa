"""
Job Tracker AI – Streamlit front end for adding an application from a job URL.
No business logic in layout; intake and extraction live in agents.
"""

from typing import List

import streamlit as st
from pydantic import ValidationError

from job_tracker_ai.agents.intake_agent import run_intake_sync
from job_tracker_ai.config import OPENAI_API_KEY, UNABLE_TO_EXTRACT
from job_tracker_ai.schemas.application import ApplicationDraft

FIELD_LABELS = {
    "company": "Company",
    "role": "Role",
    "salary": "Salary",
    "location": "Location",
    "remote_status": "Remote status",
}


def _display_value(value: str) -> str:
    if not value:
        return "—"
    if value == UNABLE_TO_EXTRACT:
        return f"*{value}*"
    return value


def _render_draft(draft: ApplicationDraft) -> None:
    """Show the extracted fields for one pasted URL."""
    if draft.is_duplicate:
        st.info("You already added this job URL in this session; it was extracted again.")
    if draft.job_data.is_placeholder:
        st.warning("Could not read this posting (login wall, blocked fetch or AI failure). Fill in the details manually.")
    data = draft.job_data.model_dump()
    for field, label in FIELD_LABELS.items():
        st.markdown(f"**{label}:** {_display_value(data[field])}")
    st.link_button("Open Job", url=draft.job_url, type="secondary")
    with st.expander("Record"):
        st.json(draft.to_record(), expanded=True)


def render_layout() -> None:
    """Streamlit page layout."""
    st.set_page_config(page_title="Job Tracker AI", layout="centered")
    st.title("Job Tracker AI")
    st.markdown("*Paste a job posting link to pre-fill company, role, salary, location and remote status.*")
    st.divider()

    # Session state: URLs added this session (duplicate check), last draft, error
    if "added_urls" not in st.session_state:
        st.session_state["added_urls"] = []
    if "last_draft" not in st.session_state:
        st.session_state["last_draft"] = None
    if "error" not in st.session_state:
        st.session_state["error"] = None

    job_url = st.text_input("Job URL", placeholder="https://…", key="job_url")
    add_clicked = st.button("Add application", type="primary", key="add_btn")

    if add_clicked:
        if not job_url or not job_url.strip():
            st.session_state["error"] = "Please enter a job URL."
        else:
            if not OPENAI_API_KEY:
                st.warning("OPENAI_API_KEY is not set; only the URL-based company guess is available.")
            st.session_state["error"] = None
            added: List[str] = st.session_state["added_urls"]
            with st.spinner("Fetching the posting and extracting job details…"):
                try:
                    draft = run_intake_sync(job_url, known_urls=added)
                    st.session_state["last_draft"] = draft
                    added.append(draft.job_url)
                except ValidationError:
                    st.session_state["error"] = "Please enter a valid URL."
                    st.session_state["last_draft"] = None

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    draft = st.session_state.get("last_draft")
    if draft is not None:
        st.subheader("Extracted details")
        _render_draft(draft)
    elif not add_clicked:
        st.info("Paste a job posting URL, then click **Add application**.")


if __name__ == "__main__":
    render_layout()
