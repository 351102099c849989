import logging

from fastapi import APIRouter, HTTPException, Request, status

from resume_analyzer.core.config import settings
from resume_analyzer.core.rate_limit import rate_limit
from resume_analyzer.normalize.normalize_jd import parse_job_description
from resume_analyzer.normalize.normalize_resume import parse_resume
from resume_analyzer.schemas import (
    AnalysisResult,
    AnalyzeRequest,
    ParsedJobDescription,
    ParsedResume,
    ParseJDRequest,
    ParseResumeRequest,
)
from resume_analyzer.services.analysis_service import analyze

logger = logging.getLogger(__name__)

router = APIRouter()

_GENERIC_FAILURE = "Failed to process the request. Please try again."


def _check_text_length(raw_text: str, label: str) -> None:
    length = len(raw_text.strip())
    if length < settings.min_input_chars:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} is too short. Provide at least {settings.min_input_chars} characters.",
        )
    if length > settings.max_input_chars:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"{label} is too long. Limit is {settings.max_input_chars} characters.",
        )


def _raise_processing_error(exc: Exception, event: str) -> None:
    if isinstance(exc, (TypeError, ValueError)):
        logger.warning("%s_rejected error=%s", event, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    logger.exception("%s_failed", event)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_GENERIC_FAILURE) from exc


@router.post("/parse-resume", response_model=ParsedResume)
@rate_limit()
async def parse_resume_endpoint(request: Request, payload: ParseResumeRequest):
    _ = request
    _check_text_length(payload.raw_text, "Resume text")
    try:
        return parse_resume(payload.raw_text, payload.file_name, payload.file_type)
    except Exception as exc:
        _raise_processing_error(exc, "parse_resume")


@router.post("/parse-jd", response_model=ParsedJobDescription)
@rate_limit()
async def parse_jd_endpoint(request: Request, payload: ParseJDRequest):
    _ = request
    _check_text_length(payload.raw_text, "Job description")
    try:
        return parse_job_description(payload.raw_text)
    except Exception as exc:
        _raise_processing_error(exc, "parse_jd")


@router.post("/analyze", response_model=AnalysisResult)
@rate_limit()
async def analyze_endpoint(request: Request, payload: AnalyzeRequest):
    _ = request
    try:
        return analyze(payload.resume, payload.jd, reference_year=payload.reference_year)
    except Exception as exc:
        _raise_processing_error(exc, "analyze")
