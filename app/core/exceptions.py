"""
Application errors.

Every error carries a client-facing ``message`` and the HTTP status it maps
to. The exception handler in ``app.main`` renders them as ``{"error": ...}``.
"""


class DownloaderError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class MissingParameter(DownloaderError):
    """The client omitted a required query parameter."""

    status_code = 400

    def __init__(self, message: str = "URL is required"):
        super().__init__(message)


class CollaboratorFailure(DownloaderError):
    """
    yt-dlp could not resolve metadata or produce a stream.

    Invalid URLs, unavailable videos and network errors all end up here with
    yt-dlp's own message; the cause is not distinguished.
    """

    status_code = 500

    def __init__(self, message: str, returncode: int = None):
        self.returncode = returncode
        super().__init__(message or "yt-dlp failed")
