from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RequirementLevel, new_id

EmploymentType = Literal["full-time", "part-time", "contract", "remote"]


class JobRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill: str
    level: RequirementLevel = "required"
    years: int | None = None


class ExperienceRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = 0
    max: int | None = None

    @field_validator("min")
    @classmethod
    def _validate_min(cls, value: int) -> int:
        if value < 0:
            raise ValueError("min must not be negative")
        return value


class SalaryRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int | None = None
    max: int | None = None
    currency: str | None = None


class ParsedJobDescription(BaseModel):
    """Structured job posting. Same creation/immutability rule as ParsedResume."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    title: str = "Position"
    company: str | None = None
    location: str | None = None
    employment_type: EmploymentType | None = None
    required_skills: list[JobRequirement] = Field(default_factory=list)
    preferred_skills: list[JobRequirement] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    experience: ExperienceRequirement = Field(default_factory=ExperienceRequirement)
    salary: SalaryRange | None = None
    raw_text: str = ""
