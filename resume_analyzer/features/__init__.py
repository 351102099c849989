from .ats_checks import analyze_ats
from .experience import build_experience_analysis, estimate_years, experience_score
from .insights import generate_strengths, generate_suggestions, generate_weaknesses
from .keyword_analysis import build_keyword_analysis, jd_keyword_list, keyword_gaps, keyword_score, resume_keyword_set
from .scores import clamp_score, round_half_up
from .skill_pipeline import SkillAlignmentResult, build_skill_alignment, skill_exists_in_resume

__all__ = [
    "analyze_ats",
    "build_experience_analysis",
    "estimate_years",
    "experience_score",
    "generate_strengths",
    "generate_weaknesses",
    "generate_suggestions",
    "build_keyword_analysis",
    "jd_keyword_list",
    "keyword_gaps",
    "keyword_score",
    "resume_keyword_set",
    "clamp_score",
    "round_half_up",
    "SkillAlignmentResult",
    "build_skill_alignment",
    "skill_exists_in_resume",
]
