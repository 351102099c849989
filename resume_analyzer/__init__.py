"""Local résumé / job-description structuring and match scoring."""

__version__ = "0.1.0"

from resume_analyzer.normalize.merge import merge_job_description, merge_resume  # noqa: E402
from resume_analyzer.normalize.normalize_jd import parse_job_description  # noqa: E402
from resume_analyzer.normalize.normalize_resume import parse_resume  # noqa: E402
from resume_analyzer.services.analysis_service import analyze  # noqa: E402
from resume_analyzer.taxonomy import normalize_skill  # noqa: E402

__all__ = [
    "__version__",
    "parse_resume",
    "parse_job_description",
    "analyze",
    "merge_resume",
    "merge_job_description",
    "normalize_skill",
]
