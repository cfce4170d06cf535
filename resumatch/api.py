"""HTTP surface: ``POST /gemini``, ``GET /live-jobs`` and ``GET /health``."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from resumatch.errors import InvalidRequest, ResumatchError
from resumatch.gemini import GeminiClient
from resumatch.log import get_logger
from resumatch.models import GenerationRequest, Ok
from resumatch.service import TextGenerator, run_generation
from resumatch.sources import JobSearchClient

log = get_logger(__name__)


class GenerateBody(BaseModel):
    type: Optional[str] = None
    resumeText: Optional[str] = None
    jobDescription: Optional[str] = None


def get_text_generator() -> TextGenerator:
    return GeminiClient()


def get_job_search_client() -> JobSearchClient:
    return JobSearchClient()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


app = FastAPI(title="Resumatch API", version="0.1.0")


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return _error("Invalid request body", status.HTTP_400_BAD_REQUEST)


@app.get("/health", summary="Health Check")
def health_check():
    return {"status": "healthy"}


@app.post("/gemini", summary="Generate job matches or interview questions")
def generate(body: GenerateBody, client: TextGenerator = Depends(get_text_generator)):
    try:
        request = GenerationRequest.from_payload(body.type, body.resumeText, body.jobDescription)
        outcome = run_generation(request, client)
    except ResumatchError as exc:
        if not isinstance(exc, InvalidRequest):
            log.error("Generation failed: %s", exc)
        return _error(exc.message or "Failed to process request", exc.http_status)
    except Exception as exc:
        log.exception("Unexpected error in /gemini")
        return _error(str(exc) or "Failed to process request", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(outcome, Ok):
        return {"result": outcome.items}
    return {"result": {"raw": outcome.raw}}


@app.get("/live-jobs", summary="Live postings for a company")
def live_jobs(
    company: Optional[str] = Query(None),
    search: JobSearchClient = Depends(get_job_search_client),
):
    try:
        postings = search.fetch_postings(company or "")
    except InvalidRequest as exc:
        return _error(exc.message, status.HTTP_400_BAD_REQUEST)
    except Exception as exc:
        log.exception("Unexpected error in /live-jobs")
        return _error(str(exc) or "Failed to fetch jobs", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"jobs": [p.to_dict() for p in postings]}
