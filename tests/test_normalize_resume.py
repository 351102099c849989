import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.normalize.normalize_resume import extract_summary, parse_resume, segment_experience  # noqa: E402
from resume_analyzer.taxonomy import normalize_skill  # noqa: E402
from samples import FULL_RESUME, SCENARIO_RESUME  # noqa: E402


def _without_ids(value):
    if isinstance(value, dict):
        return {key: _without_ids(item) for key, item in value.items() if key != "id"}
    if isinstance(value, list):
        return [_without_ids(item) for item in value]
    return value


class ResumeContactTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.resume = parse_resume(FULL_RESUME, "jane.pdf", "pdf")

    def test_contact_fields(self):
        contact = self.resume.contact
        self.assertEqual(contact.name, "Jane Smith")
        self.assertEqual(contact.email, "jane.smith@example.com")
        self.assertEqual(contact.phone, "(415) 555-0134")
        self.assertEqual(contact.location, "San Francisco, CA")
        self.assertEqual(contact.linkedin, "linkedin.com/in/janesmith")
        self.assertEqual(contact.github, "github.com/janesmith")
        self.assertEqual(contact.portfolio, "https://janesmith.dev")

    def test_summary_is_section_text(self):
        self.assertTrue(self.resume.summary.startswith("Backend engineer with 6 years"))

    def test_identity_fields_are_kept(self):
        self.assertEqual(self.resume.file_name, "jane.pdf")
        self.assertEqual(self.resume.file_type, "pdf")
        self.assertEqual(self.resume.raw_text, FULL_RESUME)


class ResumeSectionTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.resume = parse_resume(FULL_RESUME)

    def test_skills_from_section_and_dictionary(self):
        lowered = {skill.lower() for skill in self.resume.skills}
        self.assertTrue({"python", "go", "sql", "docker", "kubernetes", "postgresql"} <= lowered)
        self.assertIn("react", lowered)
        self.assertIn("aws", lowered)

    def test_skills_unique_under_normalization(self):
        keys = [normalize_skill(skill) for skill in self.resume.skills]
        self.assertEqual(len(keys), len(set(keys)))

    def test_experience_entries(self):
        self.assertEqual(len(self.resume.experience), 2)
        first, second = self.resume.experience

        self.assertEqual(first.position, "Senior Software Engineer")
        self.assertEqual(first.company, "Stripe")
        self.assertEqual(first.start_date, "Jan 2021")
        self.assertEqual(first.end_date, "Present")
        self.assertTrue(first.current)
        self.assertEqual(len(first.description), 2)
        self.assertTrue(first.description[0].startswith("Led migration"))

        self.assertEqual(second.position, "Software Engineer")
        self.assertEqual(second.company, "Plaid")
        self.assertEqual(second.start_date, "Jun 2018")
        self.assertEqual(second.end_date, "Dec 2020")
        self.assertFalse(second.current)

    def test_education_entry(self):
        self.assertEqual(len(self.resume.education), 1)
        education = self.resume.education[0]
        self.assertEqual(education.degree, "B.S.")
        self.assertEqual(education.field, "Computer Science")
        self.assertEqual(education.institution, "University of California")
        self.assertEqual(education.start_date, "2014")
        self.assertEqual(education.end_date, "2018")
        self.assertEqual(education.gpa, "3.8")

    def test_project_entry(self):
        self.assertEqual(len(self.resume.projects), 1)
        project = self.resume.projects[0]
        self.assertEqual(project.name, "Ledger Viz")
        self.assertEqual(project.technologies, ["React", "D3", "Flask"])
        self.assertEqual(project.github, "https://github.com/janesmith/ledger-viz")
        self.assertIsNone(project.url)
        self.assertEqual(project.description, "Interactive dashboard for ledger anomalies")

    def test_certification_entry(self):
        self.assertEqual(len(self.resume.certifications), 1)
        certification = self.resume.certifications[0]
        self.assertEqual(certification.name, "AWS Certified Solutions Architect")
        self.assertEqual(certification.issuer, "Amazon Web Services")
        self.assertEqual(certification.date, "2022")

    def test_languages_drop_proficiency_levels(self):
        self.assertEqual(self.resume.languages, ["English", "Spanish"])


class ResumeEdgeCaseTests(unittest.TestCase):
    def test_scenario_resume(self):
        resume = parse_resume(SCENARIO_RESUME)
        self.assertTrue({"python", "sql", "aws"} <= {skill.lower() for skill in resume.skills})
        self.assertEqual(len(resume.experience), 1)
        entry = resume.experience[0]
        self.assertEqual(entry.position, "Data Engineer")
        self.assertEqual(entry.company, "Acme Corp")
        self.assertTrue(entry.current)
        self.assertEqual(entry.description, ["Built ETL pipelines"])

    def test_text_without_sections_yields_empty_fields(self):
        resume = parse_resume("just some words without structure")
        self.assertEqual(resume.experience, [])
        self.assertEqual(resume.education, [])
        self.assertEqual(resume.projects, [])
        self.assertEqual(resume.certifications, [])
        self.assertIsNone(resume.summary)
        self.assertIsNone(resume.languages)
        self.assertEqual(resume.contact.email, "")

    def test_empty_text(self):
        resume = parse_resume("")
        self.assertEqual(resume.skills, [])
        self.assertEqual(resume.contact.name, "")

    def test_non_string_input_is_rejected(self):
        with self.assertRaises(TypeError):
            parse_resume(None)  # type: ignore[arg-type]

    def test_unsupported_file_type_is_rejected(self):
        with self.assertRaises(ValueError):
            parse_resume(SCENARIO_RESUME, "cv.txt", "txt")

    def test_parsing_is_idempotent_apart_from_ids(self):
        first = parse_resume(FULL_RESUME)
        second = parse_resume(FULL_RESUME)
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(_without_ids(first.model_dump()), _without_ids(second.model_dump()))

    def test_inline_languages_label_without_heading(self):
        resume = parse_resume("Jane Roe\nLanguages: French, German (B2)\n")
        self.assertEqual(resume.languages, ["French", "German"])


class SummaryLengthTests(unittest.TestCase):
    def _summary(self, length):
        return extract_summary(["SUMMARY", "x" * length])

    def test_summary_length_bounds(self):
        self.assertIsNone(self._summary(49))
        self.assertEqual(self._summary(50), "x" * 50)
        self.assertEqual(self._summary(2000), "x" * 2000)
        self.assertIsNone(self._summary(2001))


class ExperienceSegmentationTests(unittest.TestCase):
    def test_second_date_range_starts_new_entry_with_its_header_lines(self):
        section = [
            "Acme Corp",
            "Data Analyst",
            "2019 - 2020",
            "Globex",
            "Data Engineer",
            "2020 - 2022",
        ]
        entries = segment_experience(section)
        self.assertEqual(
            entries,
            [["Acme Corp", "Data Analyst", "2019 - 2020"], ["Globex", "Data Engineer", "2020 - 2022"]],
        )

    def test_lowercase_line_continues_previous_bullet(self):
        section = [
            "Analyst | Initech | 2016 - 2018",
            "- Reconciled quarterly reports across",
            "three regional offices",
        ]
        entries = segment_experience(section)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0][-1], "- Reconciled quarterly reports across three regional offices")


if __name__ == "__main__":
    unittest.main()
