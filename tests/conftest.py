import os
import tempfile
from unittest.mock import MagicMock

# Keep test runs from writing logs into the working tree
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "stt_service_test_logs"))

import pytest
from httpx import AsyncClient, ASGITransport

from helpers import CopyNormalizer, HELLO_WORLD_RESULT, make_wav_bytes
from stt_service.main import app
from stt_service.services.recognition_engine import RecognitionEngine
from stt_service.services.transcription import TranscriptionService


@pytest.fixture
def wav_bytes(tmp_path_factory):
    """One second of 16 kHz mono PCM WAV."""
    path = tmp_path_factory.mktemp("audio") / "tone.wav"
    return make_wav_bytes(path)


@pytest.fixture
def mock_recognizer():
    recognizer = MagicMock()
    recognizer.AcceptWaveform.return_value = False
    recognizer.FinalResult.return_value = HELLO_WORLD_RESULT
    return recognizer


@pytest.fixture
def mock_engine(mock_recognizer):
    engine = MagicMock(spec=RecognitionEngine)
    engine.create_recognizer.return_value = mock_recognizer
    return engine


@pytest.fixture
def work_dir(tmp_path):
    """Directory that receives every temp file a pipeline run creates."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def make_service(mock_engine, work_dir):
    """Factory for a real pipeline wired to the mock engine and a copy normalizer."""

    def _make(normalizer=None) -> TranscriptionService:
        return TranscriptionService(
            engine=mock_engine,
            normalizer=normalizer or CopyNormalizer(work_dir),
            sample_rate=16000,
            chunk_size=4096,
            temp_dir=work_dir,
        )

    return _make


@pytest.fixture
async def async_client():
    """Async HTTP client for testing FastAPI endpoints (lifespan is not run)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
