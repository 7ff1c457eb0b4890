from typing import AsyncIterator
from app.models.internal import DownloadIntent
from app.services.format import FormatDecision
from app.services.ytdlp import ytdlp_client
from app.utils.filename import attachment_filename

class StreamService:
    """Video streaming service"""

    @staticmethod
    async def stream(intent: DownloadIntent) -> tuple[AsyncIterator[bytes], dict, str]:
        """
        Resolve the filename, then open the yt-dlp byte stream.
        Returns (generator, headers, media_type)
        """
        media = FormatDecision.get_metadata(intent)

        metadata = await ytdlp_client.get_info(intent.url)
        filename = attachment_filename(metadata.title, media.ext)

        generator = await ytdlp_client.download(intent.url, media.format_str)

        headers = {
            'Content-Disposition': f'attachment; filename="{filename}"',
            'X-Content-Type-Options': 'nosniff',
            'Cache-Control': 'no-cache',
        }

        return generator, headers, media.media_type
