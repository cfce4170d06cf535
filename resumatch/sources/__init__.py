from .base import JobSearchBase
from .jsearch import JSearchSource, format_posted_date
from .synthetic import SyntheticJobGenerator

from resumatch.config import load_search_scope
from resumatch.errors import InvalidRequest
from resumatch.log import get_logger
from resumatch.models import LivePosting

log = get_logger(__name__)

__all__ = [
    "JobSearchBase", "JSearchSource", "SyntheticJobGenerator",
    "JobSearchClient", "format_posted_date",
]


class JobSearchClient:
    """Live postings for a company, degrading to synthetic ones on any upstream trouble.

    Default sources are built on first use, so a broken ``config/search.yaml``
    surfaces as an error from :meth:`fetch_postings` rather than from the
    constructor.
    """

    def __init__(
        self,
        live: JobSearchBase | None = None,
        fallback: SyntheticJobGenerator | None = None,
    ) -> None:
        self._live = live
        self._fallback = fallback

    def _sources(self) -> tuple[JobSearchBase, SyntheticJobGenerator]:
        if self._live is None or self._fallback is None:
            scope = load_search_scope()
            if self._live is None:
                self._live = JSearchSource(scope=scope)
            if self._fallback is None:
                self._fallback = SyntheticJobGenerator(scope=scope)
        return self._live, self._fallback

    def fetch_postings(self, company: str) -> list[LivePosting]:
        company = (company or "").strip()
        if not company:
            raise InvalidRequest("Company parameter is required")
        live, fallback = self._sources()

        if isinstance(live, JSearchSource) and not live.api_key:
            log.warning("No RAPID_API_KEY configured — using fallback postings for %r", company)
            return fallback.generate(company)

        try:
            postings = live.search(company)
        except Exception as exc:
            log.error("Live job search for %r FAILED: %s — using fallback postings", company, exc)
            return fallback.generate(company)

        if not postings:
            log.info("No live results for %r, using fallback data", company)
            return fallback.generate(company)

        log.info("Live job search returned %d postings for %r", len(postings), company)
        return postings
