from __future__ import annotations

import logging

from resume_analyzer.core.config.scoring import get_scoring_value
from resume_analyzer.schemas import ATSAnalysis, ATSIssue, ParsedResume

from .scores import clamp_score

logger = logging.getLogger(__name__)


def _penalty(name: str, default: int) -> int:
    return int(get_scoring_value(f"ats.penalties.{name}", default))


def analyze_ats(resume: ParsedResume) -> ATSAnalysis:
    """Structural parseability check over the résumé alone."""
    base = get_scoring_value("ats.base", {}) or {}
    format_score = int(base.get("format", 90))
    structure_score = int(base.get("structure", 90))
    readability_score = int(base.get("readability", 85))
    keyword_score = int(base.get("keyword", 70))
    issues: list[ATSIssue] = []

    if not resume.contact.email:
        issues.append(
            ATSIssue(
                type="content",
                severity="critical",
                message="Missing email address",
                location="Contact section",
                fix="Add your professional email address",
            )
        )
        format_score -= _penalty("missing_email", 15)

    if not resume.contact.phone:
        issues.append(
            ATSIssue(
                type="content",
                severity="warning",
                message="Missing phone number",
                location="Contact section",
                fix="Add a phone number for recruiters to contact you",
            )
        )
        format_score -= _penalty("missing_phone", 5)

    if not resume.contact.name:
        issues.append(
            ATSIssue(
                type="content",
                severity="critical",
                message="Name not detected",
                location="Header",
                fix="Ensure your full name is clearly visible at the top",
            )
        )
        format_score -= _penalty("missing_name", 10)

    if not resume.experience:
        issues.append(
            ATSIssue(
                type="structure",
                severity="critical",
                message="No work experience detected",
                location="Experience section",
                fix="Add work experience with clear job titles, company names, and dates",
            )
        )
        structure_score -= _penalty("missing_experience", 25)
    else:
        bare = next((entry for entry in resume.experience if not entry.description), None)
        if bare is not None:
            label = " at ".join(part for part in (bare.position, bare.company) if part)
            issues.append(
                ATSIssue(
                    type="content",
                    severity="warning",
                    message=f"Missing description for {label}",
                    location="Experience section",
                    fix="Add bullet points describing your responsibilities and achievements",
                )
            )
            structure_score -= _penalty("missing_bullets", 5)

    if not resume.education:
        issues.append(
            ATSIssue(
                type="structure",
                severity="suggestion",
                message="No education information detected",
                location="Education section",
                fix="Add your educational background if relevant",
            )
        )

    min_skills = int(get_scoring_value("ats.min_skills", 5))
    if not resume.skills:
        issues.append(
            ATSIssue(
                type="keyword",
                severity="warning",
                message="No skills section detected",
                location="Skills section",
                fix="Add a dedicated skills section with relevant technical and soft skills",
            )
        )
        keyword_score -= _penalty("missing_skills", 20)
    elif len(resume.skills) < min_skills:
        issues.append(
            ATSIssue(
                type="keyword",
                severity="suggestion",
                message="Limited skills listed",
                location="Skills section",
                fix="Consider adding more relevant skills to improve keyword matching",
            )
        )
        keyword_score -= _penalty("few_skills", 10)
    else:
        skill_score = get_scoring_value("ats.skill_score", {}) or {}
        keyword_score = min(
            int(skill_score.get("cap", 90)),
            int(skill_score.get("base", 60)) + len(resume.skills) * int(skill_score.get("per_skill", 3)),
        )

    if not resume.summary:
        issues.append(
            ATSIssue(
                type="structure",
                severity="suggestion",
                message="No professional summary detected",
                location="Summary section",
                fix="Add a brief professional summary highlighting your key qualifications",
            )
        )

    if len(resume.raw_text) < int(get_scoring_value("ats.min_document_chars", 500)):
        issues.append(
            ATSIssue(
                type="format",
                severity="suggestion",
                message="Resume appears to be very short",
                location="Overall document",
                fix=(
                    "Ensure all content was properly extracted. If using images or complex "
                    "formatting, consider a simpler layout."
                ),
            )
        )
        readability_score -= _penalty("short_document", 15)

    score = clamp_score((format_score + structure_score + readability_score + keyword_score) / 4)
    logger.debug("ats_checked resume_id=%s score=%s issues=%s", resume.id, score, len(issues))
    return ATSAnalysis(
        score=score,
        format_score=format_score,
        structure_score=structure_score,
        readability_score=readability_score,
        keyword_score=keyword_score,
        issues=issues,
    )
