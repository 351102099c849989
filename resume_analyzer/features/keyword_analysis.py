from __future__ import annotations

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.normalize.keywords import collect_keywords, count_keyword
from resume_analyzer.schemas import KeywordAnalysis, KeywordFrequency, ParsedJobDescription, ParsedResume
from resume_analyzer.taxonomy import get_default_taxonomy_provider

from .scores import percent


def resume_keyword_set(resume: ParsedResume) -> set[str]:
    taxonomy = get_default_taxonomy_provider()
    keywords = set(collect_keywords(resume.raw_text))
    for skill in resume.skills:
        keywords.add(skill.lower())
        keywords.add(taxonomy.normalize_skill(skill))
    return keywords


def jd_keyword_list(jd: ParsedJobDescription) -> list[str]:
    return collect_keywords(jd.raw_text, int(get_scoring_value("keywords.jd_keyword_limit", 50)))


def keyword_score(resume_keywords: set[str], jd_keywords: list[str]) -> int:
    if not jd_keywords:
        return int(get_scoring_value("matching.defaults.keyword_without_jd_keywords", 70))
    matched = [keyword for keyword in jd_keywords if keyword in resume_keywords]
    return percent(len(matched), len(jd_keywords))


def keyword_gaps(resume_keywords: set[str], jd_keywords: list[str]) -> list[str]:
    limit = int(get_scoring_value("matching.missing_keyword_limit", 10))
    return [keyword for keyword in jd_keywords if keyword not in resume_keywords][:limit]


def _importance(keyword: str, jd: ParsedJobDescription) -> str:
    taxonomy = get_default_taxonomy_provider()
    canonical = taxonomy.normalize_skill(keyword)
    if any(taxonomy.normalize_skill(item.skill) == canonical for item in jd.required_skills):
        return "high"
    if any(taxonomy.normalize_skill(item.skill) == canonical for item in jd.preferred_skills):
        return "medium"
    return "low"


def build_keyword_analysis(
    resume: ParsedResume,
    jd: ParsedJobDescription,
    jd_keywords: list[str],
) -> list[KeywordAnalysis]:
    limit = int(get_scoring_value("matching.keyword_analysis_limit", 25))
    analysis: list[KeywordAnalysis] = []
    for keyword in jd_keywords[:limit]:
        resume_count = count_keyword(resume.raw_text, keyword)
        analysis.append(
            KeywordAnalysis(
                keyword=keyword,
                frequency=KeywordFrequency(resume=resume_count, jd=count_keyword(jd.raw_text, keyword)),
                importance=_importance(keyword, jd),
                suggestions=[] if resume_count else [f'Consider adding "{keyword}" to your resume if applicable'],
            )
        )
    return analysis
