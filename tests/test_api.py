import os
import random
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import yaml  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from resumatch.api import app, get_job_search_client, get_text_generator  # noqa: E402
from resumatch.config import SearchScope  # noqa: E402
from resumatch.errors import UpstreamError  # noqa: E402
from resumatch.gemini import GeminiClient  # noqa: E402
from resumatch.sources import JobSearchBase, JobSearchClient, SyntheticJobGenerator  # noqa: E402

FENCED_JOBS = (
    '```json\n[{"title":"Backend Engineer","description":"...","requiredSkills":["Go","SQL"]}]\n```'
)


class StubGenerator:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def generate(self, prompt):
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


class _DownSource(JobSearchBase):
    def search(self, company):
        raise OSError("connection reset")


class _ExplodingClient:
    def fetch_postings(self, company):
        raise RuntimeError("boom")


class GeminiEndpointTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use(self, generator):
        app.dependency_overrides[get_text_generator] = lambda: generator
        return generator

    def test_find_jobs_strips_fences(self):
        stub = self._use(StubGenerator(FENCED_JOBS))
        response = self.client.post(
            "/gemini",
            json={"type": "findJobs", "resumeText": "Experienced backend engineer with Go and SQL."},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"result": [{"title": "Backend Engineer", "description": "...", "requiredSkills": ["Go", "SQL"]}]},
        )
        self.assertEqual(stub.calls, 1)

    def test_questions_without_job_description_is_400(self):
        stub = self._use(StubGenerator("[]"))
        response = self.client.post("/gemini", json={"type": "generateQuestions", "resumeText": "Resume"})
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["error"].startswith("Job description is required"))
        self.assertEqual(stub.calls, 0)

    def test_missing_resume_is_400(self):
        self._use(StubGenerator("[]"))
        response = self.client.post("/gemini", json={"type": "findJobs"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Resume text is required"})

    def test_unknown_type_is_400(self):
        self._use(StubGenerator("[]"))
        response = self.client.post("/gemini", json={"type": "rewrite", "resumeText": "Resume"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request type"})

    def test_non_object_body_is_400(self):
        self._use(StubGenerator("[]"))
        response = self.client.post("/gemini", json=["findJobs"])
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_unparseable_output_returns_raw_text(self):
        self._use(StubGenerator("Sorry, I cannot do that."))
        response = self.client.post("/gemini", json={"type": "findJobs", "resumeText": "Resume"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"result": {"raw": "Sorry, I cannot do that."}})

    def test_questions_wrapper_is_unwrapped(self):
        self._use(StubGenerator('{"questions": [{"question": "Q", "answer": "A"}]}'))
        response = self.client.post(
            "/gemini",
            json={"type": "generateQuestions", "resumeText": "Resume", "jobDescription": "JD"},
        )
        self.assertEqual(response.json(), {"result": [{"question": "Q", "answer": "A"}]})

    def test_upstream_failure_is_500(self):
        self._use(StubGenerator(error=UpstreamError("quota exceeded", status=429)))
        response = self.client.post("/gemini", json={"type": "findJobs", "resumeText": "Resume"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "quota exceeded"})

    def test_missing_credential_is_500(self):
        os.environ["GEMINI_API_KEY"] = ""
        try:
            self._use(GeminiClient())
            response = self.client.post("/gemini", json={"type": "findJobs", "resumeText": "Resume"})
        finally:
            os.environ.pop("GEMINI_API_KEY", None)
        self.assertEqual(response.status_code, 500)
        self.assertIn("GEMINI_API_KEY", response.json()["error"])


class LiveJobsEndpointTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_missing_company_is_400(self):
        response = self.client.get("/live-jobs")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Company parameter is required"})

    def test_upstream_outage_still_returns_postings(self):
        search = JobSearchClient(
            live=_DownSource(),
            fallback=SyntheticJobGenerator(scope=SearchScope(), rng=random.Random(3)),
        )
        app.dependency_overrides[get_job_search_client] = lambda: search
        response = self.client.get("/live-jobs", params={"company": "Acme"})
        self.assertEqual(response.status_code, 200)
        jobs = response.json()["jobs"]
        self.assertTrue(3 <= len(jobs) <= 5)
        for job in jobs:
            self.assertEqual(set(job), {"id", "title", "company", "location", "type", "url", "posted"})
            self.assertEqual(job["company"], "Acme")

    def test_unexpected_errors_are_500(self):
        app.dependency_overrides[get_job_search_client] = lambda: _ExplodingClient()
        response = self.client.get("/live-jobs", params={"company": "Acme"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "boom"})

    def test_broken_search_config_is_json_500(self):
        with patch("resumatch.sources.load_search_scope", side_effect=yaml.YAMLError("bad search.yaml")):
            response = self.client.get("/live-jobs", params={"company": "Acme"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "bad search.yaml"})

    def test_missing_company_skips_config_loading(self):
        with patch("resumatch.sources.load_search_scope", side_effect=yaml.YAMLError("bad")) as load:
            response = self.client.get("/live-jobs")
        self.assertEqual(response.status_code, 400)
        load.assert_not_called()

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})


if __name__ == "__main__":
    unittest.main()
