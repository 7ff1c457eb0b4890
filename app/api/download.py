from typing import Optional
from fastapi import APIRouter, Request, Query
from fastapi.responses import StreamingResponse
from app.models.request import DEFAULT_QUALITY, DownloadRequest
from app.models.response import ErrorResponse
from app.services.stream import StreamService
from app.core.exceptions import CollaboratorFailure, DownloaderError, MissingParameter
from app.core.logging import log_info, log_error, safe_url_for_log

router = APIRouter()

@router.get(
    "/download",
    response_class=StreamingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download_video(
    request: Request,
    url: Optional[str] = Query(None, description="Video URL"),
    quality: Optional[str] = Query(None, description="Quality label, 'Audio' or 'highest'"),
):
    """Stream the video (or its audio) straight from yt-dlp"""
    if not url:
        raise MissingParameter()

    intent = DownloadRequest(url=url, quality=quality or DEFAULT_QUALITY).to_intent()
    log_info(request, f"Starting stream for {safe_url_for_log(intent.url)} (quality={intent.quality})")

    try:
        generator, headers, media_type = await StreamService.stream(intent)
    except DownloaderError as e:
        log_error(request, f"Download error: {e.message}")
        raise
    except Exception as e:
        log_error(request, f"Download error: {str(e)}")
        raise CollaboratorFailure(str(e))

    async def logged_generator():
        sent = 0
        try:
            async for chunk in generator:
                sent += len(chunk)
                yield chunk
        except DownloaderError as e:
            log_error(request, f"Stream aborted after {sent} bytes: {e.message}")
            raise
        finally:
            await generator.aclose()
            log_info(request, f"Stream closed after {sent} bytes")

    return StreamingResponse(
        logged_generator(),
        media_type=media_type,
        headers=headers
    )
