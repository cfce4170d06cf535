#!/usr/bin/env python3
"""Entry point to serve the résumé matcher HTTP API."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

import uvicorn

from resumatch.config import gemini_api_key, get_env, job_search_api_key
from resumatch.log import get_logger

log = get_logger(__name__)


def _check_setup() -> None:
    """Warn about missing credentials; neither is fatal at startup."""
    if not gemini_api_key():
        log.warning("GEMINI_API_KEY not set — /gemini requests will fail until it is configured")
    if not job_search_api_key():
        log.warning("RAPID_API_KEY not set — /live-jobs will serve placeholder postings")


if __name__ == "__main__":
    _check_setup()
    host = get_env("HOST", "127.0.0.1") or "127.0.0.1"
    port = int(get_env("PORT", "8000") or "8000")
    log.info("Serving API on http://%s:%d", host, port)
    uvicorn.run("resumatch.api:app", host=host, port=port)
