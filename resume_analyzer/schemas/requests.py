from __future__ import annotations

from pydantic import BaseModel, Field

from .common import FileType
from .jd import ParsedJobDescription
from .resume import ParsedResume


class ParseResumeRequest(BaseModel):
    raw_text: str
    file_name: str = Field(default="", max_length=255)
    file_type: FileType = "pdf"


class ParseJDRequest(BaseModel):
    raw_text: str


class AnalyzeRequest(BaseModel):
    resume: ParsedResume
    jd: ParsedJobDescription
    reference_year: int | None = Field(default=None, ge=1900, le=2200)


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
