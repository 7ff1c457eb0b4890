from .filename import attachment_filename, clean_filename
from .formatting import format_duration, format_size, format_views

__all__ = ["attachment_filename", "clean_filename", "format_duration", "format_size", "format_views"]
