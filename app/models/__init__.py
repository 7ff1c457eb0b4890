from .internal import DownloadIntent, RawFormat, VideoMetadata
from .request import DownloadRequest
from .response import FormatDescriptor, VideoInfo

__all__ = ["DownloadIntent", "DownloadRequest", "FormatDescriptor", "RawFormat", "VideoInfo", "VideoMetadata"]
