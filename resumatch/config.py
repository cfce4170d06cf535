"""Load environment credentials and the job-search scope."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from resumatch.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SEARCH_CONFIG_PATH: Path = CONFIG_DIR / "search.yaml"

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"

_DEFAULT_LOCATIONS: list[str] = [
    "Mumbai, India",
    "Bangalore, India",
    "Delhi, India",
    "Hyderabad, India",
    "Chennai, India",
    "Pune, India",
    "Ahmedabad, India",
    "Kolkata, India",
    "Remote (India)",
]


@dataclass(frozen=True)
class SearchScope:
    """Geographic filter applied to every live job-search query."""

    query_template: str = "{company} jobs in India"
    country: str = "IN"
    default_location: str = "India"
    synthetic_locations: tuple[str, ...] = field(default_factory=lambda: tuple(_DEFAULT_LOCATIONS))

    def query_for(self, company: str) -> str:
        return self.query_template.format(company=company)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def gemini_api_key() -> str:
    return get_env("GEMINI_API_KEY")


def gemini_model() -> str:
    return get_env("GEMINI_MODEL", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL


def gemini_base_url() -> str:
    return get_env("GEMINI_BASE_URL", GEMINI_OPENAI_BASE_URL) or GEMINI_OPENAI_BASE_URL


def job_search_api_key() -> str:
    # RapidAPI keys work for every RapidAPI-hosted service, JSearch included
    return get_env("RAPID_API_KEY") or get_env("JSEARCH_API_KEY")


def job_search_timeout() -> float | None:
    """Seconds to wait on the job-search service; ``None`` leaves it to the transport."""
    raw = get_env("JSEARCH_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric JSEARCH_TIMEOUT=%r", raw)
        return None


def load_search_scope(path: Path | None = None) -> SearchScope:
    """Read ``config/search.yaml`` if present, otherwise the India defaults."""
    path = path or SEARCH_CONFIG_PATH
    if not path.exists():
        return SearchScope()

    with open(path, "r", encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    defaults = SearchScope()
    locations = data.get("synthetic_locations") or list(defaults.synthetic_locations)
    scope = SearchScope(
        query_template=data.get("query_template") or defaults.query_template,
        country=data.get("country") or defaults.country,
        default_location=data.get("default_location") or defaults.default_location,
        synthetic_locations=tuple(str(loc) for loc in locations),
    )
    log.debug("Loaded search scope from %s (country=%s)", path.name, scope.country)
    return scope
