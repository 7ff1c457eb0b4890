from pydantic import BaseModel, Field
from app.models.internal import DownloadIntent

AUDIO_MARKER = "Audio"
DEFAULT_QUALITY = "highest"

class DownloadRequest(BaseModel):
    url: str = Field(..., description="Video URL (validated by yt-dlp)")
    quality: str = Field(DEFAULT_QUALITY, description="Quality label from /api/info, 'Audio', or 'highest'")

    @property
    def audio_only(self) -> bool:
        """Any quality containing 'Audio' (case-sensitive) selects the audio path"""
        return AUDIO_MARKER in self.quality

    def to_intent(self) -> DownloadIntent:
        """Convert to download intent"""
        return DownloadIntent(
            url=self.url,
            quality=self.quality,
            audio_only=self.audio_only,
        )
