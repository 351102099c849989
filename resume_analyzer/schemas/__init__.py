from .analysis import (
    AnalysisResult,
    ATSAnalysis,
    ATSIssue,
    ExperienceAnalysis,
    KeywordAnalysis,
    KeywordFrequency,
    SkillMatch,
)
from .common import new_id
from .requests import AnalyzeRequest, HealthResponse, ParseJDRequest, ParseResumeRequest
from .jd import ExperienceRequirement, JobRequirement, ParsedJobDescription, SalaryRange
from .resume import Certification, ContactInfo, Education, ParsedResume, Project, WorkExperience

__all__ = [
    "ContactInfo",
    "WorkExperience",
    "Education",
    "Project",
    "Certification",
    "ParsedResume",
    "JobRequirement",
    "ExperienceRequirement",
    "SalaryRange",
    "ParsedJobDescription",
    "SkillMatch",
    "ExperienceAnalysis",
    "KeywordFrequency",
    "KeywordAnalysis",
    "ATSIssue",
    "ATSAnalysis",
    "AnalysisResult",
    "new_id",
    "ParseResumeRequest",
    "ParseJDRequest",
    "AnalyzeRequest",
    "HealthResponse",
]
