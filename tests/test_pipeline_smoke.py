import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import resume_analyzer.main  # noqa: F401,E402
from resume_analyzer import analyze, parse_job_description, parse_resume  # noqa: E402
from resume_analyzer.core.config.scoring import get_scoring_value  # noqa: E402
from samples import FULL_JD, FULL_RESUME  # noqa: E402


class PipelineSmokeTests(unittest.TestCase):
    def test_safe_imports_and_scoring_config_lookup(self):
        self.assertEqual(get_scoring_value("matching.weights.keyword"), 0.3)

    def test_end_to_end_result_serializes(self):
        result = analyze(parse_resume(FULL_RESUME), parse_job_description(FULL_JD))
        payload = json.loads(result.model_dump_json())
        self.assertEqual(payload["resume_id"], result.resume_id)
        self.assertIn("created_at", payload)
        self.assertTrue(payload["skill_matches"])


if __name__ == "__main__":
    unittest.main()
