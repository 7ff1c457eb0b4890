from typing import Optional
from fastapi import APIRouter, Request, Query
from app.models.response import ErrorResponse, VideoInfo
from app.services.info import VideoInfoService
from app.core.exceptions import CollaboratorFailure, DownloaderError, MissingParameter
from app.core.logging import log_info, log_error, safe_url_for_log

router = APIRouter()

@router.get(
    "/info",
    response_model=VideoInfo,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_video_info(request: Request, url: Optional[str] = Query(None, description="Video URL")):
    """Get video title, stats and available formats"""
    if not url:
        raise MissingParameter()

    log_info(request, f"Fetching info for {safe_url_for_log(url)}")

    try:
        video_info = await VideoInfoService.fetch(url)
    except DownloaderError as e:
        log_error(request, f"Video info error: {e.message}")
        raise
    except Exception as e:
        log_error(request, f"Video info error: {str(e)}")
        raise CollaboratorFailure(str(e))

    log_info(request, f"Info retrieved: {video_info.title}")
    return video_info
