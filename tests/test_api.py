import sys
import unittest
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from resume_analyzer import __version__  # noqa: E402
from resume_analyzer.core.rate_limit import limiter  # noqa: E402
from resume_analyzer.main import app  # noqa: E402
from samples import SCENARIO_JD, SCENARIO_RESUME  # noqa: E402


class AnalysisApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        limiter.reset()

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "version": __version__})

    def test_parse_resume(self):
        response = self.client.post(
            "/v1/parse-resume",
            json={"raw_text": SCENARIO_RESUME, "file_name": "john.pdf", "file_type": "pdf"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["contact"]["email"], "john@x.com")
        self.assertEqual(body["file_name"], "john.pdf")
        self.assertTrue({"python", "sql", "aws"} <= {skill.lower() for skill in body["skills"]})

    def test_parse_resume_rejects_short_text(self):
        response = self.client.post("/v1/parse-resume", json={"raw_text": "too short"})
        self.assertEqual(response.status_code, 400)

    def test_parse_resume_rejects_oversized_text(self):
        response = self.client.post("/v1/parse-resume", json={"raw_text": "x" * 60_000})
        self.assertEqual(response.status_code, 413)
        self.assertIn("too long", response.json()["detail"])

    def test_parse_resume_rejects_unknown_file_type(self):
        response = self.client.post(
            "/v1/parse-resume",
            json={"raw_text": SCENARIO_RESUME, "file_type": "txt"},
        )
        self.assertEqual(response.status_code, 422)

    def test_parse_jd(self):
        response = self.client.post("/v1/parse-jd", json={"raw_text": SCENARIO_JD})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["title"], "Data Engineer")
        self.assertEqual([item["skill"] for item in body["required_skills"]], ["Python", "SQL", "AWS"])

    def test_analyze_round_trip(self):
        resume = self.client.post("/v1/parse-resume", json={"raw_text": SCENARIO_RESUME}).json()
        jd = self.client.post("/v1/parse-jd", json={"raw_text": SCENARIO_JD}).json()

        response = self.client.post("/v1/analyze", json={"resume": resume, "jd": jd, "reference_year": 2024})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["resume_id"], resume["id"])
        self.assertEqual(body["jd_id"], jd["id"])
        self.assertEqual(body["skill_match_score"], 100)
        self.assertEqual(body["experience_score"], 95)
        self.assertGreaterEqual(body["overall_score"], 85)

    def test_unexpected_failure_returns_generic_error(self):
        resume = self.client.post("/v1/parse-resume", json={"raw_text": SCENARIO_RESUME}).json()
        jd = self.client.post("/v1/parse-jd", json={"raw_text": SCENARIO_JD}).json()

        with mock.patch("resume_analyzer.api.v1.analysis.analyze", side_effect=RuntimeError("boom")):
            response = self.client.post("/v1/analyze", json={"resume": resume, "jd": jd})

        self.assertEqual(response.status_code, 500)
        self.assertNotIn("boom", response.json()["detail"])


if __name__ == "__main__":
    unittest.main()
