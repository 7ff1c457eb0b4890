from fastapi import Request
import logging
from typing import Any
from urllib.parse import urlparse
from rich.logging import RichHandler
from app.config.settings import LoggingConfig

logger = logging.getLogger(__name__)

def setup_logging(logging_config: LoggingConfig) -> None:
    """Configure root logging once at startup."""
    if logging_config.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(logging_config.format))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(f"%(asctime)s %(levelname)s %(name)s {logging_config.format}"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging_config.level)

def log_with_context(
    request: Request,
    level: int,
    message: str,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    Automatically includes request_id for tracing.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    extra = {
        "request_id": request_id,
        **kwargs
    }
    logger.log(level, f"[{request_id}] {message}", extra=extra)

def log_info(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)

def log_error(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, **kwargs)

def safe_url_for_log(url: str) -> str:
    """Safe URL for logging (query string dropped)"""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "invalid_url"
    if not parsed.scheme or not parsed.netloc:
        return "invalid_url"
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"
