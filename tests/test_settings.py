import pytest
from pydantic import ValidationError
import app.main as main
from app.config.settings import Config


def test_port_defaults_to_3000(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert Config().port == 3000


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Config().port == 8080


def test_invalid_port_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "0")
    with pytest.raises(ValidationError):
        Config()


def test_nested_overrides(monkeypatch):
    monkeypatch.setenv("LOGGING__LEVEL", "debug")
    monkeypatch.setenv("YTDLP__BINARY", "/opt/bin/yt-dlp")
    cfg = Config()
    assert cfg.logging.level == "DEBUG"
    assert cfg.ytdlp.binary == "/opt/bin/yt-dlp"


def test_run_listens_on_configured_port(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.setattr(main.config, "port", 8080)

    main.run()

    assert calls[0]["port"] == 8080
    assert calls[0]["host"] == main.config.host
