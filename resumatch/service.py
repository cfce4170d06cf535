"""Generation pipeline: validate → prompt → Gemini → normalize."""
from __future__ import annotations

from typing import Protocol

from resumatch.gemini import GeminiClient
from resumatch.log import get_logger
from resumatch.models import GenerationRequest, NormalizationOutcome, Ok
from resumatch.normalizer import normalize_response
from resumatch.prompts import prompt_for

log = get_logger(__name__)


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


def run_generation(request: GenerationRequest, client: TextGenerator | None = None) -> NormalizationOutcome:
    """One upstream call per request; ``ConfigError``/``UpstreamError`` propagate."""
    client = client or GeminiClient()
    prompt = prompt_for(request)
    log.info(
        "Generating %s (resume %d chars, job description %d chars)",
        request.kind.value,
        len(request.resume_text),
        len(request.job_description),
    )
    raw = client.generate(prompt)
    outcome = normalize_response(raw, request.kind)
    if isinstance(outcome, Ok):
        log.info("%s produced %d record(s)", request.kind.value, len(outcome.items))
    else:
        log.warning("%s response could not be parsed; returning raw text", request.kind.value)
    return outcome
