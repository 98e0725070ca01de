from unittest.mock import patch

import pytest
from starlette.testclient import TestClient

from stt_service.core.config import settings
from stt_service.core.exceptions import ModelLoadingError
from stt_service.main import app


@pytest.fixture
def lazy_model(monkeypatch):
    monkeypatch.setattr(settings, "PRELOAD_MODEL", False)


def test_health_endpoint_returns_200_without_model(lazy_model):
    """Health stays OK even though no model has been loaded."""
    with TestClient(app) as client:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.text == "OK"
        assert app.state.engine.is_loaded is False


def test_lifespan_closes_engine_on_shutdown(lazy_model):
    with patch("stt_service.main.RecognitionEngine.close") as close:
        with TestClient(app):
            close.assert_not_called()

    close.assert_called_once()


def test_startup_fails_when_preloading_missing_model(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "PRELOAD_MODEL", True)
    monkeypatch.setattr(settings, "VOSK_MODEL_PATH", str(tmp_path / "missing-model"))

    with pytest.raises(ModelLoadingError):
        with TestClient(app):
            pass
