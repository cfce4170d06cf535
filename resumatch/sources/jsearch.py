"""JSearch API (RapidAPI) — live postings for one company."""
from __future__ import annotations

import math
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import requests

from resumatch.config import SearchScope, job_search_api_key, job_search_timeout, load_search_scope
from resumatch.log import get_logger
from resumatch.models import LivePosting
from resumatch.sources.base import JobSearchBase

log = get_logger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        posted = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            posted = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if posted.tzinfo is None:
        posted = posted.replace(tzinfo=timezone.utc)
    return posted


def format_posted_date(value: Any, now: datetime | None = None) -> str:
    """Human-relative label for an ISO timestamp, rounding partial days up."""
    posted = _parse_timestamp(value)
    if posted is None:
        return "Recently posted"
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = math.ceil(abs((now - posted).total_seconds()) / _SECONDS_PER_DAY)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    return f"{days} days ago"


def search_url(company: str, scope: SearchScope) -> str:
    return "https://www.google.com/search?q=" + quote(scope.query_for(company), safe="")


def _random_id() -> str:
    return f"job-{uuid.uuid4().hex[:9]}"


def _location(hit: dict[str, Any], default: str) -> str:
    city = str(hit.get("job_city") or "").strip()
    if not city:
        return default
    state = str(hit.get("job_state") or "").strip()
    return f"{city}, {state}" if state else city


def to_posting(hit: dict[str, Any], company: str, scope: SearchScope) -> LivePosting:
    return LivePosting(
        id=str(hit.get("job_id") or _random_id()),
        title=hit.get("job_title") or "Position Available",
        company=hit.get("employer_name") or company,
        location=_location(hit, scope.default_location),
        employment_type=hit.get("job_employment_type") or "Not specified",
        apply_url=hit.get("job_apply_link") or hit.get("job_google_link") or search_url(company, scope),
        posted_label=format_posted_date(hit.get("job_posted_at_datetime_utc")),
    )


class JSearchSource(JobSearchBase):
    """Page 1 only; every upstream result is treated as already scoped to the region."""

    BASE = "https://jsearch.p.rapidapi.com"

    def __init__(
        self,
        api_key: str | None = None,
        scope: SearchScope | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key: str = api_key if api_key is not None else job_search_api_key()
        self.scope = scope or load_search_scope()
        self.timeout = timeout if timeout is not None else job_search_timeout()

    def _fetch(self, company: str) -> list[Any]:
        r = requests.get(
            f"{self.BASE}/search",
            params={
                "query": self.scope.query_for(company),
                "page": "1",
                "num_pages": "1",
                "country": self.scope.country,
            },
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": "jsearch.p.rapidapi.com",
            },
            timeout=self.timeout,
        )
        if r.status_code == 403:
            log.warning("JSearch 403 — subscribe at https://rapidapi.com/letscrape-6bRDu3Sgupt/api/jsearch")
        r.raise_for_status()
        data = r.json()
        hits = data.get("data") if isinstance(data, dict) else None
        return hits if isinstance(hits, list) else []

    def search(self, company: str) -> list[LivePosting]:
        hits = self._fetch(company)
        postings: list[LivePosting] = []
        seen: set[str] = set()
        for hit in hits:
            if not isinstance(hit, dict):
                continue
            posting = to_posting(hit, company, self.scope)
            # Repeated upstream ids keep the first; later copies get a fresh id
            if posting.id in seen:
                log.debug("Duplicate JSearch job_id %r for %r, assigning a new id", posting.id, company)
                posting = replace(posting, id=_random_id())
            seen.add(posting.id)
            postings.append(posting)
        log.debug("JSearch company=%r returned %d postings", company, len(postings))
        return postings
