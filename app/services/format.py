import re
from pydantic import BaseModel
from app.models.internal import DownloadIntent

HIGHEST = "highest"
AUDIO_FORMAT = "bestaudio/best"
VIDEO_FORMAT = "best"

_QUALITY_LABEL = re.compile(r"^(\d+)p(\d+)?$")

class MediaMetadata(BaseModel):
    """How an intent is fetched and delivered"""
    format_str: str
    ext: str
    media_type: str

class FormatDecision:
    """Make format decisions"""

    @staticmethod
    def decide(intent: DownloadIntent) -> str:
        """Decide yt-dlp format string based on intent"""
        if intent.audio_only:
            return AUDIO_FORMAT

        if intent.quality == HIGHEST:
            # Single file carrying both audio and video, no merge needed for stdout
            return VIDEO_FORMAT

        match = _QUALITY_LABEL.match(intent.quality)
        if match:
            return f"best[height<={match.group(1)}]/{VIDEO_FORMAT}"

        # Format id or raw selector; yt-dlp rejects unknown values
        return intent.quality

    @staticmethod
    def get_metadata(intent: DownloadIntent) -> MediaMetadata:
        """Get media metadata based on intent"""
        return MediaMetadata(
            format_str=FormatDecision.decide(intent),
            ext='mp3' if intent.audio_only else 'mp4',
            media_type='application/octet-stream'
        )
