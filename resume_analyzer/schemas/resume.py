from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import new_id


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None


class WorkExperience(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    company: str = ""
    position: str = ""
    location: str | None = None
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: list[str] = Field(default_factory=list)


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str | None = None


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    url: str | None = None
    github: str | None = None


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: str
    issuer: str = ""
    date: str = ""


class ParsedResume(BaseModel):
    """Structured résumé record. Created once per upload and never edited in place."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    languages: list[str] | None = None
    raw_text: str = ""
    file_name: str = ""
    file_type: str = "pdf"

    @field_validator("file_type")
    @classmethod
    def _validate_file_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "docx"}:
            raise ValueError("file_type must be one of: pdf, docx")
        return normalized
