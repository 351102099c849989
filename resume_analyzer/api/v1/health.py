from fastapi import APIRouter

from resume_analyzer import __version__
from resume_analyzer.schemas import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check the health status of the application.",
)
async def health_check():
    return HealthResponse(status="healthy", version=__version__)
