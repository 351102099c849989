from __future__ import annotations

import re
from datetime import date

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.normalize.keywords import contains_term
from resume_analyzer.schemas import ExperienceAnalysis, ParsedJobDescription, ParsedResume, WorkExperience

from .scores import round_half_up

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_PRESENT_RE = re.compile(r"present|current", re.IGNORECASE)


def extract_year(value: str, reference_year: int) -> int | None:
    if not value:
        return None
    if _PRESENT_RE.search(value):
        return reference_year
    match = _YEAR_RE.search(value)
    return int(match.group(0)) if match else None


def entry_months(entry: WorkExperience, reference_year: int) -> int:
    start = extract_year(entry.start_date, reference_year)
    end = reference_year if entry.current else extract_year(entry.end_date, reference_year)
    if start is None or end is None:
        return int(get_scoring_value("experience.months_per_unparsed_entry", 24))
    return max(0, (end - start) * 12)


def estimate_years(resume: ParsedResume, reference_year: int | None = None) -> int:
    year = reference_year if reference_year is not None else date.today().year
    total_months = sum(entry_months(entry, year) for entry in resume.experience)
    return round_half_up(total_months / 12)


def experience_score(resume: ParsedResume, jd: ParsedJobDescription, reference_year: int | None = None) -> int:
    scores = get_scoring_value("experience.scores", {}) or {}
    required = jd.experience.min or 0
    if required == 0:
        return int(scores.get("no_requirement", 85))

    years = estimate_years(resume, reference_year)
    maximum = jd.experience.max or required + int(get_scoring_value("experience.default_max_span_years", 5))
    tolerance = int(get_scoring_value("experience.max_tolerance_years", 2))
    if required <= years <= maximum + tolerance:
        return int(scores.get("within_range", 95))
    if years >= required * float(get_scoring_value("experience.ratios.near", 0.8)):
        return int(scores.get("near", 80))
    if years >= required * float(get_scoring_value("experience.ratios.partial", 0.5)):
        return int(scores.get("partial", 60))
    return int(scores.get("below", 40))


def build_experience_analysis(resume: ParsedResume, jd_keywords: list[str]) -> list[ExperienceAnalysis]:
    max_entries = int(get_scoring_value("experience.analysis.max_entries", 5))
    strong = int(get_scoring_value("experience.analysis.strong_match_keywords", 3))
    scores = get_scoring_value("experience.analysis.scores", {}) or {}

    analysis: list[ExperienceAnalysis] = []
    for entry in resume.experience[:max_entries]:
        entry_text = " ".join([entry.position, entry.company, *entry.description])
        matched = [keyword for keyword in jd_keywords if contains_term(entry_text, keyword)]
        if len(matched) > strong:
            relevance = int(scores.get("strong", 85))
        elif len(matched) > 1:
            relevance = int(scores.get("some", 70))
        else:
            relevance = int(scores.get("none", 50))
        analysis.append(
            ExperienceAnalysis(
                position=entry.position,
                company=entry.company,
                relevance_score=relevance,
                matched_keywords=matched[:5],
                suggestions=["Add more specific details and achievements"] if len(matched) < 2 else [],
                weak_points=(
                    ["Could use more bullet points describing responsibilities"]
                    if len(entry.description) < 3
                    else []
                ),
            )
        )
    return analysis
