"""Data models for generation requests, AI results, and live postings."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from resumatch.errors import FormatError, InvalidRequest


class RequestKind(str, Enum):
    FIND_JOBS = "findJobs"
    GENERATE_QUESTIONS = "generateQuestions"

    @classmethod
    def parse(cls, value: Any) -> "RequestKind":
        if isinstance(value, cls):
            return value
        for kind in cls:
            if kind.value == value:
                return kind
        raise InvalidRequest("Invalid request type")


@dataclass(frozen=True)
class GenerationRequest:
    kind: RequestKind
    resume_text: str
    job_description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RequestKind):
            raise InvalidRequest("Invalid request type")
        if not (self.resume_text or "").strip():
            raise InvalidRequest("Resume text is required")
        if self.kind is RequestKind.GENERATE_QUESTIONS and not (self.job_description or "").strip():
            raise InvalidRequest("Job description is required for generating interview questions")

    @classmethod
    def from_payload(
        cls,
        kind: Any,
        resume_text: str | None,
        job_description: str | None = None,
    ) -> "GenerationRequest":
        """Validate loosely-typed input; résumé presence is checked before the kind."""
        if not isinstance(resume_text, str) or not resume_text.strip():
            raise InvalidRequest("Resume text is required")
        if job_description is not None and not isinstance(job_description, str):
            raise InvalidRequest("Job description must be text")
        return cls(
            kind=RequestKind.parse(kind),
            resume_text=resume_text,
            job_description=job_description or "",
        )


@dataclass
class JobMatch:
    title: str
    description: str
    required_skills: list[str] = field(default_factory=list)
    company: str = "Unknown"
    location: str = "Unknown"
    employment_type: str = "Unknown"


@dataclass
class InterviewQA:
    question: str
    answer: str


@dataclass
class LivePosting:
    id: str
    title: str
    company: str
    location: str
    employment_type: str
    apply_url: str
    posted_label: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "type": self.employment_type,
            "url": self.apply_url,
            "posted": self.posted_label,
        }


@dataclass(frozen=True)
class Ok:
    """Generated text parsed into an ordered list of records."""

    items: list[Any]


@dataclass(frozen=True)
class RawFallback:
    """Generated text that could not be parsed, kept verbatim."""

    raw: str

    def to_error(self) -> FormatError:
        return FormatError(self.raw)


NormalizationOutcome = Union[Ok, RawFallback]
