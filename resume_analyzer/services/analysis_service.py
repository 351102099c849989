from __future__ import annotations

import logging

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.features import (
    analyze_ats,
    build_experience_analysis,
    build_keyword_analysis,
    build_skill_alignment,
    clamp_score,
    experience_score,
    generate_strengths,
    generate_suggestions,
    generate_weaknesses,
    jd_keyword_list,
    keyword_gaps,
    keyword_score,
    resume_keyword_set,
)
from resume_analyzer.schemas import AnalysisResult, ParsedJobDescription, ParsedResume

logger = logging.getLogger(__name__)


def overall_score(skill_match: int, keyword: int, experience: int) -> int:
    weights = get_scoring_value("matching.weights", {}) or {}
    return clamp_score(
        float(weights.get("skill_match", 0.4)) * skill_match
        + float(weights.get("keyword", 0.3)) * keyword
        + float(weights.get("experience", 0.3)) * experience
    )


def analyze(
    resume: ParsedResume,
    jd: ParsedJobDescription,
    *,
    reference_year: int | None = None,
) -> AnalysisResult:
    """Score a structured résumé against a structured job description.

    Deterministic apart from the result id and timestamp. `reference_year`
    stands in for the current year when estimating tenure of ongoing roles.
    """
    if not isinstance(resume, ParsedResume) or not isinstance(jd, ParsedJobDescription):
        raise TypeError("analyze expects a ParsedResume and a ParsedJobDescription")

    resume_keywords = resume_keyword_set(resume)
    jd_keywords = jd_keyword_list(jd)

    alignment = build_skill_alignment(resume, jd)
    keyword = keyword_score(resume_keywords, jd_keywords)
    experience = experience_score(resume, jd, reference_year)
    ats = analyze_ats(resume)
    total_skills = len(alignment.matches)

    result = AnalysisResult(
        resume_id=resume.id,
        jd_id=jd.id,
        overall_score=overall_score(alignment.score, keyword, experience),
        skill_match_score=alignment.score,
        experience_score=experience,
        keyword_score=keyword,
        ats_score=ats.score,
        skill_matches=alignment.matches,
        experience_analysis=build_experience_analysis(resume, jd_keywords),
        keyword_analysis=build_keyword_analysis(resume, jd, jd_keywords),
        ats_analysis=ats,
        strengths=generate_strengths(resume, len(alignment.matched), total_skills),
        weaknesses=generate_weaknesses(resume, jd, alignment.missing),
        missing_skills=alignment.missing,
        suggestions=generate_suggestions(alignment.missing, ats, keyword_gaps(resume_keywords, jd_keywords)),
    )
    logger.info(
        "analysis_completed id=%s resume_id=%s jd_id=%s overall=%s skills=%s keywords=%s experience=%s ats=%s",
        result.id,
        resume.id,
        jd.id,
        result.overall_score,
        result.skill_match_score,
        result.keyword_score,
        result.experience_score,
        result.ats_score,
    )
    return result
