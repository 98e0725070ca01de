"""
FastAPI application entry point.

Main application with lifespan management, CORS, and API routing.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import settings
from .core.logging import logger
from .api.router import api_router
from .services.recognition_engine import RecognitionEngine


@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=redefined-outer-name
    """
    Application lifespan manager.

    Creates the shared recognition engine on startup and releases it on shutdown.
    """
    logger.info("=" * 80)
    logger.info("Speech Transcription Service starting...")
    logger.info(f"Vosk model path: {settings.VOSK_MODEL_PATH}")
    logger.info(f"Converter: {settings.FFMPEG_BINARY} -> {settings.SAMPLE_RATE}Hz, {settings.CHANNELS}ch")
    logger.info("=" * 80)

    engine = RecognitionEngine(settings.VOSK_MODEL_PATH, settings.VOSK_LOG_LEVEL)
    app.state.engine = engine

    if settings.PRELOAD_MODEL:
        # Loading takes seconds; do it before the first request arrives
        engine.load()
    else:
        logger.info("Model will be loaded on first request")

    yield

    logger.info("Speech Transcription Service shutting down...")
    engine.close()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Speech Transcription Service",
    description="Offline speech-to-text over HTTP using ffmpeg and Vosk",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint.

    Returns service information.
    """
    return {
        "service": "Speech Transcription Service",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/api/health",
    }


def run():
    """Start the service with uvicorn."""
    # log_config=None keeps uvicorn on the loguru forwarding set up in core.logging
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
