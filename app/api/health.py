from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.state import state
from app.models.response import FullHealthResponse, HealthResponse, RootResponse

router = APIRouter()


def utc_timestamp() -> str:
    """ISO-8601 in UTC with milliseconds, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/", response_model=RootResponse)
async def root():
    """Root endpoint"""
    return {
        "message": "YouTube Downloader API is Working!",
        "status": "active",
        "endpoints": {
            "info": "/api/info?url=YOUTUBE_URL",
            "download": "/api/download?url=YOUTUBE_URL&quality=QUALITY",
        },
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight health check"""
    return {"status": "OK", "timestamp": utc_timestamp()}


@router.get("/health/full", response_model=FullHealthResponse)
async def health_check_full():
    """Detailed health check"""
    return {
        "status": "OK",
        "timestamp": utc_timestamp(),
        "ytdlp_version": state.ytdlp_version,
        "js_runtime": state.js_runtime,
    }
