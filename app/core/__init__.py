from .exceptions import CollaboratorFailure, DownloaderError, MissingParameter

__all__ = ["CollaboratorFailure", "DownloaderError", "MissingParameter"]
