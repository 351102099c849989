import re
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.normalize.rules import ExtractionRule, first_match, regex_rule  # noqa: E402
from resume_analyzer.normalize.utils import (  # noqa: E402
    build_heading_index,
    find_section,
    is_bullet_like,
    strip_bullet_prefix,
)


class ExtractionRuleTests(unittest.TestCase):
    def test_regex_rule_returns_normalized_first_group(self):
        rule = regex_rule("label", r"Name:\s*(.+)")
        self.assertEqual(rule("Name:   Ada    Lovelace"), "Ada Lovelace")
        self.assertIsNone(rule("nothing here"))

    def test_first_matching_rule_wins(self):
        rules = (
            regex_rule("first", r"alpha=(\w+)"),
            regex_rule("second", r"beta=(\w+)"),
        )
        self.assertEqual(first_match(rules, "beta=2 alpha=1"), "1")
        self.assertEqual(first_match(rules, "beta=2"), "2")
        self.assertIsNone(first_match(rules, "gamma=3"))

    def test_build_returning_none_moves_to_next_match(self):
        rule = regex_rule(
            "long_word",
            re.compile(r"\b(\w+)\b"),
            lambda match: match.group(1) if len(match.group(1)) > 3 else None,
        )
        self.assertEqual(rule("a an the words"), "words")

    def test_plain_callable_rule(self):
        rule = ExtractionRule("upper", lambda text: text.upper() or None)
        self.assertEqual(first_match([rule], "abc"), "ABC")
        self.assertIsNone(first_match([rule], ""))


class LineHelperTests(unittest.TestCase):
    def test_bullets(self):
        self.assertTrue(is_bullet_like("• Shipped the thing"))
        self.assertTrue(is_bullet_like("- Shipped the thing"))
        self.assertTrue(is_bullet_like("2) Shipped the thing"))
        self.assertFalse(is_bullet_like("-5% churn"))
        self.assertFalse(is_bullet_like("•"))
        self.assertEqual(strip_bullet_prefix("  ▪ Shipped"), "Shipped")

    def test_find_section_stops_at_other_heading_and_skips_repeats(self):
        headings = build_heading_index({"skills": ("skills", "technical skills"), "education": ("education",)})
        lines = ["SKILLS", "Python", "Technical Skills:", "SQL", "EDUCATION", "BSc", "SKILLS", "Go"]
        self.assertEqual(find_section(lines, "skills", headings), ["Python", "SQL"])
        self.assertEqual(find_section(lines, "education", headings), ["BSc"])

    def test_find_section_inline_label(self):
        headings = build_heading_index({"skills": ("skills",)})
        self.assertEqual(find_section(["Skills: Python, SQL", "Other"], "skills", headings, allow_inline=True), ["Python, SQL"])
        self.assertIsNone(find_section(["Skills: Python, SQL"], "skills", headings))


if __name__ == "__main__":
    unittest.main()
