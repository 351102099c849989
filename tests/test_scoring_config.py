import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.core.config import scoring  # noqa: E402
from resume_analyzer.core.config.scoring import get_scoring_config, get_scoring_value  # noqa: E402


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("matching.weights.skill_match"), 0.4)
        self.assertEqual(get_scoring_value("matching.defaults.skill_match_without_jd_skills"), 75)
        self.assertEqual(get_scoring_value("experience.scores.within_range"), 95)

    def test_weights_sum_to_one(self):
        weights = get_scoring_value("matching.weights")
        self.assertAlmostEqual(sum(weights.values()), 1.0)

    def test_missing_paths_return_default(self):
        self.assertEqual(get_scoring_value("matching.weights.unknown", 7), 7)
        self.assertEqual(get_scoring_value("matching.weights.skill_match.deeper", "x"), "x")
        self.assertIsNone(get_scoring_value(""))

    def test_default_config_ships_inside_the_package(self):
        package_dir = Path(scoring.__file__).resolve().parent
        with mock.patch.dict(os.environ, {"SCORING_CONFIG_PATH": ""}):
            path = scoring.scoring_config_path()
        self.assertEqual(path, package_dir / "scoring.yaml")
        self.assertTrue(path.is_file())
        self.assertIn("matching", scoring.load_scoring_config(path))

    def test_invalid_file_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                scoring.load_scoring_config(path)
            with self.assertRaises(RuntimeError):
                scoring.load_scoring_config(Path(tmp) / "missing.yaml")

    def test_path_override_from_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("matching:\n  weights:\n    skill_match: 0.5\n", encoding="utf-8")
            with mock.patch.dict(os.environ, {"SCORING_CONFIG_PATH": str(path)}):
                scoring.reset_scoring_config_cache()
                try:
                    self.assertEqual(get_scoring_value("matching.weights.skill_match"), 0.5)
                finally:
                    scoring.reset_scoring_config_cache()
        self.assertEqual(get_scoring_value("matching.weights.skill_match"), 0.4)


if __name__ == "__main__":
    unittest.main()
