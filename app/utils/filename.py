import re

MAX_FILENAME_LENGTH = 50
FALLBACK_FILENAME = "download"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")


def clean_filename(name: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """
    Make a title safe for Content-Disposition and local filesystems.

    Anything but ASCII word characters and whitespace is dropped, whitespace
    runs become a single underscore, and the result is cut to ``max_length``.
    """
    name = _UNSAFE_CHARS.sub("", name or "")
    name = _WHITESPACE.sub("_", name)
    return name[:max_length]


def attachment_filename(title: str, ext: str) -> str:
    """'<clean title>.<ext>', e.g. 'My_Song.mp3'"""
    root = clean_filename(title) or FALLBACK_FILENAME
    return f"{root}.{ext}"
