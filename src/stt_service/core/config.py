"""
Configuration settings for the transcription service.

Uses Pydantic Settings to load from environment variables with .env file support.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from ..utils.file_ops import get_project_root

# Compute .env file path using project root utility
try:
    _PROJECT_ROOT = get_project_root()
    _ENV_FILE = _PROJECT_ROOT / ".env"
except FileNotFoundError:
    _ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"


class Settings(BaseSettings):
    """Application configuration settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        case_sensitive=True,
        extra="ignore",  # Allow extra fields in .env
    )

    # Vosk model
    VOSK_MODEL_PATH: str = "/models/vosk-model-small-en-us-0.15"
    VOSK_LOG_LEVEL: int = -1  # -1 silences Kaldi, 0 is Vosk's default verbosity
    PRELOAD_MODEL: bool = True  # Load at startup instead of on first request

    # Audio conversion
    FFMPEG_BINARY: str = "ffmpeg"
    SAMPLE_RATE: int = 16000  # Hz
    CHANNELS: int = 1
    CHUNK_SIZE: int = 4096  # Bytes fed to the recognizer per call
    TEMP_DIR: Optional[Path] = None  # None uses the system temp directory

    # Server settings
    HOST: str = "127.0.0.1"  # Set to 0.0.0.0 to expose publicly
    PORT: int = 8080

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]


# Global settings instance
settings = Settings()
