"""Placeholder postings used when the live job search is unavailable."""
from __future__ import annotations

import random
import re

from resumatch.config import SearchScope, load_search_scope
from resumatch.log import get_logger
from resumatch.models import LivePosting
from resumatch.sources.base import JobSearchBase

log = get_logger(__name__)

STANDARD_POSITIONS: list[str] = [
    "Software Engineer",
    "Data Analyst",
    "Product Manager",
    "UX Designer",
    "Marketing Specialist",
    "Frontend Developer",
    "Backend Developer",
    "Full Stack Developer",
    "DevOps Engineer",
    "QA Engineer",
]

JOB_TYPES: list[str] = ["Full-time", "Part-time", "Contract", "Temporary", "Internship"]

MIN_POSTINGS = 3
MAX_POSTINGS = 5


def _slug(value: str) -> str:
    return re.sub(r"\s+", "-", value.lower())


def posted_days_label(days: int) -> str:
    return f"{days} day{'' if days == 1 else 's'} ago"


class SyntheticJobGenerator(JobSearchBase):
    def __init__(self, scope: SearchScope | None = None, rng: random.Random | None = None) -> None:
        self.scope = scope or load_search_scope()
        self.rng = rng or random.Random()

    def generate(self, company: str) -> list[LivePosting]:
        count = self.rng.randint(MIN_POSTINGS, MAX_POSTINGS)
        postings: list[LivePosting] = []
        for i in range(count):
            position = self.rng.choice(STANDARD_POSITIONS)
            postings.append(
                LivePosting(
                    id=f"job-{i + 1}",
                    title=position,
                    company=company,
                    location=self.rng.choice(self.scope.synthetic_locations),
                    employment_type=self.rng.choice(JOB_TYPES),
                    apply_url=f"https://example.com/jobs/{_slug(company)}/{_slug(position)}",
                    posted_label=posted_days_label(self.rng.randint(1, 30)),
                )
            )
        log.info("Generated %d synthetic postings for %r", count, company)
        return postings

    def search(self, company: str) -> list[LivePosting]:
        return self.generate(company)
