from pydantic import BaseModel, Field
from typing import List, Optional, Union

class RawFormat(BaseModel):
    """One format entry as reported by yt-dlp"""
    format_id: Optional[str] = None
    quality_label: Optional[str] = None
    quality: Optional[str] = None
    has_video: bool = False
    has_audio: bool = False
    content_length: Optional[int] = None

    @property
    def audio_only(self) -> bool:
        return self.has_audio and not self.has_video

class VideoMetadata(BaseModel):
    """Normalized yt-dlp metadata (read-only)"""
    title: str
    length_seconds: int = 0
    view_count: Optional[Union[int, str]] = None
    thumbnails: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    formats: List[RawFormat] = Field(default_factory=list)

class DownloadIntent(BaseModel):
    """Internal download intent (separated from HTTP concerns)"""
    url: str
    quality: str = "highest"
    audio_only: bool = False
