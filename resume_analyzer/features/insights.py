from __future__ import annotations

import re

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.schemas import ATSAnalysis, ParsedJobDescription, ParsedResume
from resume_analyzer.taxonomy import get_default_taxonomy_provider

from .scores import percent

QUANTIFIED_RE = re.compile(r"\d+%|\$\d+|\d+\s*(?:users|customers|projects|years)", re.IGNORECASE)
_ADVANCED_DEGREE_MARKERS = ("master", "phd", "ph.d", "mba", "doctor")


def _setting(name: str, default: int) -> int:
    return int(get_scoring_value(f"insights.{name}", default))


def generate_strengths(resume: ParsedResume, matched_count: int, total_skills: int) -> list[str]:
    strengths: list[str] = []

    if matched_count > 0:
        match_percent = percent(matched_count, max(total_skills, 1))
        if match_percent >= _setting("strong_match_percent", 70):
            strengths.append(f"Strong skill alignment - {matched_count} of {total_skills} required skills matched")
        elif match_percent >= _setting("good_match_percent", 50):
            strengths.append(f"Good skill coverage - {matched_count} matching skills found")

    if len(resume.experience) >= _setting("extensive_history_entries", 3):
        strengths.append("Extensive work history demonstrates career progression")
    elif resume.experience:
        strengths.append("Relevant work experience documented")

    if resume.education:
        advanced = any(
            marker in entry.degree.lower() for entry in resume.education for marker in _ADVANCED_DEGREE_MARKERS
        )
        if advanced:
            strengths.append("Advanced degree adds credibility")
        else:
            strengths.append("Educational background supports qualifications")

    if resume.projects:
        strengths.append("Project portfolio demonstrates practical application of skills")
    if resume.certifications:
        strengths.append("Professional certifications validate expertise")
    if resume.contact.linkedin or resume.contact.github or resume.contact.portfolio:
        strengths.append("Online presence allows further evaluation of work")

    return strengths[: _setting("max_strengths", 5)]


def generate_weaknesses(resume: ParsedResume, jd: ParsedJobDescription, missing_skills: list[str]) -> list[str]:
    taxonomy = get_default_taxonomy_provider()
    weaknesses: list[str] = []

    required = {taxonomy.normalize_skill(item.skill) for item in jd.required_skills}
    required_missing = [skill for skill in missing_skills if taxonomy.normalize_skill(skill) in required]
    named = _setting("max_missing_skills_named", 3)
    if len(required_missing) > 2:
        weaknesses.append(
            f"Missing {len(required_missing)} required skills: {', '.join(required_missing[:named])}"
        )
    elif required_missing:
        weaknesses.append(f"Some required skills not found: {', '.join(required_missing)}")

    if not resume.summary:
        weaknesses.append("No professional summary - adding one can help recruiters quickly assess your fit")

    if len(resume.skills) < int(get_scoring_value("ats.min_skills", 5)):
        weaknesses.append("Skills section could be expanded to improve ATS matching")

    detail = _setting("detailed_description_bullets", 2)
    if any(len(entry.description) < detail for entry in resume.experience):
        weaknesses.append("Some job descriptions lack detail - add specific achievements and responsibilities")

    if len(QUANTIFIED_RE.findall(resume.raw_text)) < _setting("min_quantified_achievements", 2):
        weaknesses.append("Limited quantifiable achievements - add metrics to demonstrate impact")

    return weaknesses[: _setting("max_weaknesses", 5)]


def generate_suggestions(missing_skills: list[str], ats: ATSAnalysis, gaps: list[str]) -> list[str]:
    listed = _setting("max_listed_gaps", 4)
    suggestions: list[str] = []

    if missing_skills:
        suggestions.append(f"Add these skills if you have experience: {', '.join(missing_skills[:listed])}")

    for issue in ats.issues:
        if issue.severity == "critical" and issue.fix:
            suggestions.append(issue.fix)

    if gaps:
        suggestions.append(f"Incorporate these keywords naturally: {', '.join(gaps[:listed])}")

    if not any("quantif" in suggestion.lower() for suggestion in suggestions):
        suggestions.append("Add quantifiable achievements (percentages, dollar amounts, team sizes)")
    suggestions.append("Use action verbs at the start of bullet points (Led, Developed, Implemented, etc.)")

    return suggestions[: _setting("max_suggestions", 6)]
