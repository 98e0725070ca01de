"""
FastAPI dependency injection.

The recognition engine is created once in the application lifespan and kept
on app.state; everything request-scoped is built around it here.
"""

import threading

from fastapi import Depends, Request

from ..core.config import settings
from ..services.audio_normalizer import AudioNormalizer, FFmpegNormalizer
from ..services.recognition_engine import RecognitionEngine
from ..services.transcription import TranscriptionService

_engine_lock = threading.Lock()


def get_recognition_engine(request: Request) -> RecognitionEngine:
    """Return the shared engine, creating an unloaded one if lifespan did not run."""
    state = request.app.state
    engine = getattr(state, "engine", None)
    if engine is not None:
        return engine

    with _engine_lock:
        engine = getattr(state, "engine", None)
        if engine is None:
            engine = RecognitionEngine(settings.VOSK_MODEL_PATH, settings.VOSK_LOG_LEVEL)
            state.engine = engine
    return engine


def get_audio_normalizer() -> AudioNormalizer:
    return FFmpegNormalizer(
        binary=settings.FFMPEG_BINARY,
        sample_rate=settings.SAMPLE_RATE,
        channels=settings.CHANNELS,
        temp_dir=settings.TEMP_DIR,
    )


def get_transcription_service(
    engine: RecognitionEngine = Depends(get_recognition_engine),
    normalizer: AudioNormalizer = Depends(get_audio_normalizer),
) -> TranscriptionService:
    return TranscriptionService(
        engine=engine,
        normalizer=normalizer,
        sample_rate=settings.SAMPLE_RATE,
        chunk_size=settings.CHUNK_SIZE,
        temp_dir=settings.TEMP_DIR,
    )
