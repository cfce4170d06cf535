"""Prompt templates for job matching and interview preparation."""
from __future__ import annotations

from typing import Any

from resumatch.models import GenerationRequest, RequestKind

RESULT_COUNT = 10

_FIND_JOBS_PROMPT = """\
Based on the following resume, suggest exactly {count} relevant job positions
that match the candidate's profile. For each position give a job title, a brief
description, and the required skills.

Return ONLY valid JSON: an array of exactly {count} objects, each with exactly
these keys and no others:

[
  {{"title": "Job title", "description": "Brief description", "requiredSkills": ["skill1", "skill2"]}}
]

Resume:
{resume_text}
"""

_QUESTIONS_PROMPT = """\
Based on the following resume and job description, generate exactly {count}
technical interview questions that are specifically relevant to assess this
candidate for this role. For each question, also provide a sample answer.

Return ONLY valid JSON: an array of exactly {count} objects, each with exactly
these keys and no others:

[
  {{"question": "Interview question", "answer": "Sample answer"}}
]

Resume:
{resume_text}

Job Description:
{job_description}
"""


def prompt_for(request: GenerationRequest) -> str:
    """Render the instruction for an already-validated request."""
    if request.kind is RequestKind.FIND_JOBS:
        return _FIND_JOBS_PROMPT.format(count=RESULT_COUNT, resume_text=request.resume_text)
    return _QUESTIONS_PROMPT.format(
        count=RESULT_COUNT,
        resume_text=request.resume_text,
        job_description=request.job_description,
    )


def build_prompt(kind: Any, resume_text: str, job_description: str | None = None) -> str:
    """Validate the inputs and build the prompt; raises ``InvalidRequest``."""
    return prompt_for(GenerationRequest.from_payload(kind, resume_text, job_description))
