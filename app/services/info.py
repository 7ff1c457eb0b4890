from typing import Iterable, List
from app.models.internal import RawFormat, VideoMetadata
from app.models.response import FormatDescriptor, VideoInfo
from app.services.ytdlp import ytdlp_client
from app.utils.formatting import format_duration, format_size, format_views

AUDIO_LABEL = "Audio"

def describe_format(f: RawFormat) -> FormatDescriptor:
    """Map a yt-dlp format to the {quality, size} pair shown to clients"""
    quality = f.quality_label
    if not quality:
        quality = AUDIO_LABEL if f.audio_only else (f.quality or f.format_id or "Unknown")
    return FormatDescriptor(quality=quality, size=format_size(f.content_length))

def summarize_formats(formats: Iterable[RawFormat]) -> List[FormatDescriptor]:
    """
    Keep formats with audio or video, one per quality label.

    The first occurrence of a label wins and source order is preserved;
    yt-dlp's ordering is not a quality ranking.
    """
    seen = set()
    unique = []
    for f in formats:
        if not (f.has_video or f.has_audio):
            continue
        descriptor = describe_format(f)
        if descriptor.quality in seen:
            continue
        seen.add(descriptor.quality)
        unique.append(descriptor)
    return unique

def build_video_info(metadata: VideoMetadata) -> VideoInfo:
    return VideoInfo(
        title=metadata.title,
        duration=format_duration(metadata.length_seconds),
        views=format_views(metadata.view_count),
        thumbnail=metadata.thumbnails[-1] if metadata.thumbnails else None,
        author=metadata.author,
        formats=summarize_formats(metadata.formats),
    )

class VideoInfoService:
    """Video info fetching service"""

    @staticmethod
    async def fetch(url: str) -> VideoInfo:
        metadata = await ytdlp_client.get_info(url)
        return build_video_info(metadata)
