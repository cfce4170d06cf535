"""Coerce free-form model output into predictable record lists.

Model output is untrusted text. :func:`normalize_response` never raises: it
returns ``Ok(list)`` whenever any list of records can be recovered and
``RawFallback(text)`` otherwise. The ``coerce_*`` helpers then turn an outcome
into typed records for display, filling placeholders for missing fields.
"""
from __future__ import annotations

import json
import re
from typing import Any

from resumatch.log import get_logger
from resumatch.models import (
    InterviewQA,
    JobMatch,
    NormalizationOutcome,
    Ok,
    RawFallback,
    RequestKind,
)

log = get_logger(__name__)

_OPENING_FENCE_RE = re.compile(r"\A\s*```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE_RE = re.compile(r"\n?[ \t]*```\s*\Z")

WRAPPER_KEYS: dict[RequestKind, str] = {
    RequestKind.FIND_JOBS: "jobs",
    RequestKind.GENERATE_QUESTIONS: "questions",
}


def strip_code_fences(text: str) -> str:
    """Drop the one Markdown fence (with any language tag) wrapping the payload and trim.

    Fences inside the payload, such as code blocks in an answer, are kept.
    """
    text = _OPENING_FENCE_RE.sub("", text, count=1)
    return _CLOSING_FENCE_RE.sub("", text, count=1).strip()


def _is_record_list(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(v, dict) for v in value)


def _unwrap(obj: dict[str, Any], kind: RequestKind) -> list[Any]:
    wrapper = WRAPPER_KEYS[kind]
    nested = obj.get(wrapper)
    if isinstance(nested, list):
        log.debug("Unwrapped %r array from object response", wrapper)
        return nested

    # Ambiguous shapes are accepted: the first array of objects in document
    # key order wins. Arrays of scalars (e.g. requiredSkills) belong to a
    # single record and must not be mistaken for the result list.
    for key, value in obj.items():
        if _is_record_list(value):
            log.debug("Using first record array %r from object response", key)
            return value

    log.debug("Wrapping single object response as a one-element list")
    return [obj]


def normalize_response(raw: str, kind: RequestKind) -> NormalizationOutcome:
    kind = RequestKind.parse(kind)
    cleaned = strip_code_fences(raw or "")
    try:
        parsed = json.loads(cleaned)
    except ValueError as exc:
        log.warning("Failed to parse %s response as JSON: %s", kind.value, exc)
        log.debug("Raw response: %s", raw)
        return RawFallback(raw)

    if isinstance(parsed, list):
        return Ok(parsed)
    if isinstance(parsed, dict):
        return Ok(_unwrap(parsed, kind))

    log.warning("Parsed %s response is a bare %s, not a record", kind.value, type(parsed).__name__)
    return RawFallback(raw)


# ── Display coercion ─────────────────────────────────────────────────────


def _text(value: Any, placeholder: str) -> str:
    if value is None:
        return placeholder
    text = value if isinstance(value, str) else str(value)
    return text.strip() or placeholder


def _skills(record: dict[str, Any]) -> list[str]:
    raw = record.get("requiredSkills")
    if not isinstance(raw, list):
        raw = record.get("skills")
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        return []
    return [str(s).strip() for s in raw if s is not None and str(s).strip()]


def to_job_match(record: Any) -> JobMatch:
    if not isinstance(record, dict):
        return JobMatch(title=_text(record, "Job Match"), description="No description available")
    return JobMatch(
        title=_text(record.get("title"), "Job Match"),
        description=_text(record.get("description"), "No description available"),
        required_skills=_skills(record),
        company=_text(record.get("company"), "Unknown"),
        location=_text(record.get("location"), "Unknown"),
        employment_type=_text(record.get("type") or record.get("employmentType"), "Unknown"),
    )


def to_interview_qa(record: Any) -> InterviewQA:
    if not isinstance(record, dict):
        return InterviewQA(question=_text(record, "Interview Question"), answer="No answer available")
    return InterviewQA(
        question=_text(record.get("question"), "Interview Question"),
        answer=_text(record.get("answer"), "No answer available"),
    )


def coerce_job_matches(outcome: NormalizationOutcome) -> list[JobMatch]:
    if isinstance(outcome, RawFallback):
        return [
            JobMatch(
                title="Response Processing Error",
                description=f"{outcome.to_error().message}. Please try again.",
                required_skills=["Try uploading a different resume"],
            )
        ]
    return [to_job_match(r) for r in outcome.items]


def coerce_interview_questions(outcome: NormalizationOutcome) -> list[InterviewQA]:
    if isinstance(outcome, RawFallback):
        return [
            InterviewQA(
                question="Response Processing Error",
                answer=f"{outcome.to_error().message}. Please try again with a different job description.",
            )
        ]
    return [to_interview_qa(r) for r in outcome.items]
