from pathlib import Path
from stt_service.core.config import Settings


def test_settings_loads_from_environment(monkeypatch):
    """Test that Settings correctly loads values from environment variables."""
    monkeypatch.setenv("VOSK_MODEL_PATH", "/opt/models/vosk-model-en-us-0.22")
    monkeypatch.setenv("FFMPEG_BINARY", "/usr/local/bin/ffmpeg")
    monkeypatch.setenv("CHUNK_SIZE", "8000")
    monkeypatch.setenv("PRELOAD_MODEL", "false")
    monkeypatch.setenv("TEMP_DIR", "/var/tmp/stt")

    settings = Settings()

    assert settings.VOSK_MODEL_PATH == "/opt/models/vosk-model-en-us-0.22"
    assert settings.FFMPEG_BINARY == "/usr/local/bin/ffmpeg"
    assert settings.CHUNK_SIZE == 8000
    assert settings.PRELOAD_MODEL is False
    assert settings.TEMP_DIR == Path("/var/tmp/stt")


def test_settings_defaults_are_correct(monkeypatch):
    """Test that Settings has correct default values."""
    for name in ("VOSK_MODEL_PATH", "SAMPLE_RATE", "CHANNELS", "CHUNK_SIZE", "TEMP_DIR"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.VOSK_MODEL_PATH == "/models/vosk-model-small-en-us-0.15"
    assert settings.FFMPEG_BINARY == "ffmpeg"
    assert settings.SAMPLE_RATE == 16000
    assert settings.CHANNELS == 1
    assert settings.CHUNK_SIZE == 4096
    assert settings.TEMP_DIR is None
    assert settings.PRELOAD_MODEL is True


def test_env_names_are_case_sensitive(monkeypatch):
    monkeypatch.delenv("VOSK_MODEL_PATH", raising=False)
    monkeypatch.setenv("vosk_model_path", "/lowercase/is/ignored")

    settings = Settings()

    assert settings.VOSK_MODEL_PATH == "/models/vosk-model-small-en-us-0.15"
