import logging
import uuid
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api import health, info, download
from app.config.settings import config
from app.core.exceptions import CollaboratorFailure, DownloaderError
from app.core.logging import setup_logging
from app.core.state import state
from app.services.ytdlp import ytdlp_client

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.logging)
    state.js_runtime = config.ytdlp.js_runtime

    try:
        state.ytdlp_version = await ytdlp_client.version()
        logger.info(f"yt-dlp {state.ytdlp_version} ready")
    except CollaboratorFailure as e:
        logger.warning(f"yt-dlp not available: {e.message}")

    logger.info(f"Server running on port {config.port}")
    yield
    logger.info("Shutting down")

app = FastAPI(
    title=config.api.title,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(DownloaderError)
async def downloader_error_handler(request: Request, exc: DownloaderError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(info.router, prefix="/api", tags=["Info"])
app.include_router(download.router, prefix="/api", tags=["Download"])

def run() -> None:
    """Console entry point"""
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)

if __name__ == "__main__":
    run()
