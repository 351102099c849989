from __future__ import annotations

import re
from dataclasses import dataclass, field

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.normalize.keywords import contains_term
from resume_analyzer.schemas import ParsedJobDescription, ParsedResume, SkillMatch
from resume_analyzer.taxonomy import get_default_taxonomy_provider

from .scores import percent

_SHORT_SKILL_LEN = 3
_TOKEN_RE = re.compile(r"[a-z0-9+#./-]+")


@dataclass(slots=True)
class SkillAlignmentResult:
    score: int
    matches: list[SkillMatch] = field(default_factory=list)
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def _in_text(term: str, lowered_text: str) -> bool:
    if not term:
        return False
    if len(term) <= _SHORT_SKILL_LEN:
        return contains_term(lowered_text, term)
    return term in lowered_text


def skill_exists_in_resume(skill: str, resume_text: str, resume_skills: list[str]) -> bool:
    taxonomy = get_default_taxonomy_provider()
    lowered_skill = skill.lower().strip()
    canonical = taxonomy.normalize_skill(skill)
    lowered_text = resume_text.lower()

    if _in_text(lowered_skill, lowered_text) or _in_text(canonical, lowered_text):
        return True

    for resume_skill in resume_skills:
        lowered_resume_skill = resume_skill.lower().strip()
        if not lowered_resume_skill:
            continue
        if taxonomy.normalize_skill(resume_skill) == canonical:
            return True
        shorter = min(lowered_skill, lowered_resume_skill, key=len)
        if len(shorter) >= _SHORT_SKILL_LEN and (
            lowered_skill in lowered_resume_skill or lowered_resume_skill in lowered_skill
        ):
            return True

    for key, alternatives in taxonomy.skill_variations.items():
        if lowered_skill != key and lowered_skill not in alternatives:
            continue
        if any(_in_text(variant, lowered_text) for variant in (key, *alternatives)):
            return True
    return False


def is_partial_match(skill: str, resume_text: str) -> bool:
    """Multi-word skill with some, but not all, significant tokens in the résumé."""
    taxonomy = get_default_taxonomy_provider()
    min_len = int(get_scoring_value("matching.partial_min_token_length", 3))
    tokens = [
        token
        for token in _TOKEN_RE.findall(skill.lower())
        if len(token) >= min_len and token not in taxonomy.stop_words
    ]
    if len(tokens) < 2:
        return False
    present = [token for token in tokens if contains_term(resume_text, token)]
    return 0 < len(present) < len(tokens)


def _context_line(text: str, term: str) -> str:
    lowered_term = term.lower().strip()
    for line in text.splitlines():
        cleaned = line.strip()
        if cleaned and lowered_term in cleaned.lower():
            return cleaned[:220]
    return ""


def build_skill_alignment(resume: ParsedResume, jd: ParsedJobDescription) -> SkillAlignmentResult:
    taxonomy = get_default_taxonomy_provider()
    required_keys = {taxonomy.normalize_skill(item.skill) for item in jd.required_skills}
    all_skills: dict[str, str] = {}
    for item in [*jd.required_skills, *jd.preferred_skills]:
        all_skills.setdefault(taxonomy.normalize_skill(item.skill), item.skill.lower())
    if not all_skills:
        return SkillAlignmentResult(score=int(get_scoring_value("matching.defaults.skill_match_without_jd_skills", 75)))

    matches: list[SkillMatch] = []
    matched: list[str] = []
    missing: list[str] = []
    for key, skill in all_skills.items():
        is_required = key in required_keys
        if skill_exists_in_resume(skill, resume.raw_text, resume.skills):
            status = "matched"
            matched.append(skill)
        elif is_partial_match(skill, resume.raw_text):
            status = "partial"
        else:
            status = "missing"
            missing.append(skill)
        resume_context = _context_line(resume.raw_text, skill) if status != "missing" else ""
        matches.append(
            SkillMatch(
                skill=skill,
                status=status,
                resume_context=resume_context or ("Found in resume" if status == "matched" else ""),
                jd_context=_context_line(jd.raw_text, skill) or ("Required skill" if is_required else "Preferred skill"),
                importance="required" if is_required else "preferred",
            )
        )

    return SkillAlignmentResult(
        score=percent(len(matched), len(all_skills)),
        matches=matches,
        matched=matched,
        missing=missing,
    )
