from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from .common import RequirementLevel, new_id

IssueType = Literal["format", "content", "structure", "keyword"]
IssueSeverity = Literal["critical", "warning", "suggestion"]


class SkillMatch(BaseModel):
    skill: str
    status: Literal["matched", "partial", "missing"]
    resume_context: str = ""
    jd_context: str = ""
    importance: RequirementLevel = "required"


class ExperienceAnalysis(BaseModel):
    position: str
    company: str
    relevance_score: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    weak_points: list[str] = Field(default_factory=list)


class KeywordFrequency(BaseModel):
    resume: int = 0
    jd: int = 0


class KeywordAnalysis(BaseModel):
    keyword: str
    frequency: KeywordFrequency
    importance: Literal["high", "medium", "low"] = "medium"
    suggestions: list[str] = Field(default_factory=list)


class ATSIssue(BaseModel):
    type: IssueType
    severity: IssueSeverity
    message: str
    location: str | None = None
    fix: str | None = None


class ATSAnalysis(BaseModel):
    score: int = Field(ge=0, le=100)
    format_score: int
    structure_score: int
    readability_score: int
    keyword_score: int
    issues: list[ATSIssue] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    id: str = Field(default_factory=new_id)
    resume_id: str
    jd_id: str
    overall_score: int = Field(ge=0, le=100)
    skill_match_score: int = Field(ge=0, le=100)
    experience_score: int = Field(ge=0, le=100)
    keyword_score: int = Field(ge=0, le=100)
    ats_score: int = Field(ge=0, le=100)
    skill_matches: list[SkillMatch] = Field(default_factory=list)
    experience_analysis: list[ExperienceAnalysis] = Field(default_factory=list)
    keyword_analysis: list[KeywordAnalysis] = Field(default_factory=list)
    ats_analysis: ATSAnalysis
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
