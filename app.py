"""Streamlit UI for the résumé job matcher."""
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from resumatch.config import gemini_api_key, job_search_api_key
from resumatch.errors import ResumatchError
from resumatch.fetch_state import FetchStatus, LiveJobsTracker
from resumatch.log import get_logger
from resumatch.models import GenerationRequest, RawFallback, RequestKind
from resumatch.normalizer import coerce_interview_questions, coerce_job_matches
from resumatch.render import posting_card_html
from resumatch.resume_parser import extract_text
from resumatch.service import run_generation
from resumatch.sources import JobSearchClient

log = get_logger(__name__)

_GLASS_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stSidebar"] {
    background: rgba(255,255,255,0.55);
    backdrop-filter: blur(16px);
    border-right: 1px solid rgba(255,255,255,0.3);
}
[data-testid="stExpander"] {
    background: rgba(255,255,255,0.5);
    backdrop-filter: blur(10px);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.35);
}
.live-job {
    padding: 0.5rem 0.75rem; background: rgba(74,144,217,0.08);
    border-left: 3px solid #4a90d9; border-radius: 6px; margin-bottom: 0.4rem;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _tracker() -> LiveJobsTracker:
    if "live_tracker" not in st.session_state:
        st.session_state["live_tracker"] = LiveJobsTracker()
    return st.session_state["live_tracker"]


def _check(label: str, ok: bool) -> str:
    icon = "✅" if ok else "⬜"
    return f"{icon}  {label}"


def _upload_text(label: str, key: str) -> str | None:
    uploaded = st.file_uploader(label, type=["pdf", "txt", "docx"], key=key)
    if not uploaded:
        return None
    try:
        return extract_text(uploaded.name, uploaded.getvalue())
    except ResumatchError as exc:
        st.error(exc.message)
        return None


def _generate(request: GenerationRequest):
    try:
        return run_generation(request)
    except ResumatchError as exc:
        st.error(exc.message)
        return None


# ── Page: Find Jobs ──────────────────────────────────────────────────────


def _live_jobs_section(index: int, default_company: str) -> None:
    tracker = _tracker()
    company = st.text_input(
        "Company", value=default_company, key=f"company_{index}",
        placeholder="Company to look up",
    )
    busy = tracker.is_fetching(index)
    if st.button("Load live openings", key=f"live_{index}", disabled=busy or not company.strip()):
        if tracker.begin(index):
            with st.spinner(f"Fetching openings at {company}…"):
                try:
                    tracker.complete(index, JobSearchClient().fetch_postings(company))
                except Exception as exc:
                    log.warning("Live openings for card %d failed: %s", index, exc)
                    tracker.fail(index, str(exc))

    state = tracker.state(index)
    if state.status is FetchStatus.failed:
        st.error(state.error or "Failed to fetch live jobs")
    elif state.status is FetchStatus.ready:
        if not state.postings:
            st.info(f"No open positions found at {company}.")
        for posting in state.postings:
            st.markdown(posting_card_html(posting), unsafe_allow_html=True)
    else:
        st.caption("Load live openings to see current postings for this company.")


def _raw_response(outcome) -> None:
    if isinstance(outcome, RawFallback) and outcome.raw.strip():
        with st.expander("Show the model's raw response"):
            st.code(outcome.raw, language=None)


def page_find_jobs() -> None:
    st.header("Find Matching Jobs")
    st.write("Upload your resume and let Gemini suggest roles that fit your profile.")

    text = _upload_text("Drop your resume here (PDF, DOCX, or TXT)", key="resume_upload")
    if text and text != st.session_state.get("resume_text"):
        st.session_state["resume_text"] = text
        st.session_state.pop("job_outcome", None)
        st.session_state.pop("qa_outcome", None)
        _tracker().reset()

    resume_text = st.session_state.get("resume_text", "")
    if not resume_text:
        st.info("Upload a resume to get started.")
        return

    if st.button("Find Jobs", type="primary", use_container_width=True):
        with st.spinner("Analyzing your resume and finding the best matches…"):
            outcome = _generate(GenerationRequest(RequestKind.FIND_JOBS, resume_text))
        if outcome is not None:
            st.session_state["job_outcome"] = outcome
            _tracker().reset()

    outcome = st.session_state.get("job_outcome")
    if outcome is None:
        return

    jobs = coerce_job_matches(outcome)
    _raw_response(outcome)
    if not jobs:
        st.warning("No matching jobs were found. Try a resume with more detail about your skills.")
        return

    st.subheader("Matching Job Opportunities")
    for i, job in enumerate(jobs):
        with st.expander(f"**{job.title}**"):
            st.markdown(job.description)
            if job.required_skills:
                st.markdown("**Required skills:** " + ", ".join(job.required_skills))
            st.divider()
            default_company = "" if job.company == "Unknown" else job.company
            _live_jobs_section(i, default_company)


# ── Page: Interview Prep ─────────────────────────────────────────────────


def page_interview() -> None:
    st.header("Interview Preparation")

    resume_text = st.session_state.get("resume_text", "")
    if not resume_text:
        st.warning("Upload your resume on **Find Jobs** first.")
        return

    uploaded_jd = _upload_text("Job description file (optional)", key="jd_upload")
    job_description = st.text_area(
        "Job description", value=uploaded_jd or st.session_state.get("job_description", ""), height=200,
    )
    st.session_state["job_description"] = job_description

    if st.button("Generate Questions", type="primary", use_container_width=True):
        if not job_description.strip():
            st.error("Both resume and job description are required")
        else:
            with st.spinner("Generating interview questions…"):
                outcome = _generate(
                    GenerationRequest(RequestKind.GENERATE_QUESTIONS, resume_text, job_description)
                )
            if outcome is not None:
                st.session_state["qa_outcome"] = outcome

    outcome = st.session_state.get("qa_outcome")
    if outcome is None:
        return

    _raw_response(outcome)
    for n, qa in enumerate(coerce_interview_questions(outcome), 1):
        with st.expander(f"**{n}. {qa.question}**"):
            st.markdown(qa.answer)


# ── Main ─────────────────────────────────────────────────────────────────


def _sidebar_status() -> None:
    with st.sidebar:
        st.markdown("**Status**")
        st.markdown(_check("Gemini API key", bool(gemini_api_key())))
        st.markdown(_check("Job search key", bool(job_search_api_key())))
        st.markdown(_check("Resume uploaded", bool(st.session_state.get("resume_text"))))


def _wrap(page):
    def _run() -> None:
        st.markdown(_GLASS_CSS, unsafe_allow_html=True)
        _sidebar_status()
        page()

    _run.__name__ = page.__name__
    return _run


pages = [
    st.Page(_wrap(page_find_jobs), title="Find Jobs", icon="💼", url_path="jobs", default=True),
    st.Page(_wrap(page_interview), title="Interview Prep", icon="🎤", url_path="interview"),
]

nav = st.navigation(pages)
nav.run()
