import copy
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from app.main import app
from app.services.ytdlp import parse_metadata, ytdlp_client
from app.core.exceptions import CollaboratorFailure


SAMPLE_INFO = {
    "id": "dQw4w9WgXcQ",
    "title": "Hello, World! @2024",
    "duration": 125,
    "view_count": 1500000,
    "uploader": "Test Channel",
    "thumbnails": [
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg", "preference": -10},
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg", "preference": 0},
    ],
    "formats": [
        {"format_id": "sb0", "format_note": "storyboard", "vcodec": "none", "acodec": "none"},
        {"format_id": "139", "format_note": "low", "vcodec": "none", "acodec": "mp4a.40.5", "filesize": 1048576},
        {"format_id": "140", "format_note": "medium", "vcodec": "none", "acodec": "mp4a.40.2", "filesize": 3145728},
        {"format_id": "18", "format_note": "360p", "vcodec": "avc1.42001E", "acodec": "mp4a.40.2",
         "height": 360, "fps": 30, "filesize_approx": 10485760},
        {"format_id": "136", "format_note": "720p", "vcodec": "avc1.4d401f", "acodec": "none",
         "height": 720, "fps": 30},
        {"format_id": "247", "format_note": "720p", "vcodec": "vp9", "acodec": "none",
         "height": 720, "fps": 30, "filesize": 20971520},
        {"format_id": "299", "format_note": "1080p60", "vcodec": "avc1.64002a", "acodec": "none",
         "height": 1080, "fps": 60, "filesize": 52428800},
    ],
}


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fake_collaborator(monkeypatch):
    """Replace yt-dlp with canned metadata and bytes; records download calls"""
    calls = []

    async def get_info(url):
        return parse_metadata(SAMPLE_INFO)

    async def download(url, format_str):
        calls.append({"url": url, "format_str": format_str})

        async def generate():
            yield b"chunk-1"
            yield b"chunk-2"

        return generate()

    monkeypatch.setattr(ytdlp_client, "get_info", get_info)
    monkeypatch.setattr(ytdlp_client, "download", download)
    return calls


@pytest.fixture
def failing_collaborator(monkeypatch):
    async def get_info(url):
        raise CollaboratorFailure("ERROR: [youtube] nope: Video unavailable", returncode=1)

    monkeypatch.setattr(ytdlp_client, "get_info", get_info)


@pytest.fixture
def sample_info():
    return copy.deepcopy(SAMPLE_INFO)
