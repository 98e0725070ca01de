"""
Custom exceptions for the transcription service.

Services raise these; only the endpoint layer maps them to HTTP responses.
"""

from pathlib import Path


class STTServiceError(Exception):
    """Base exception for all transcription service errors."""

    pass


class ModelLoadingError(STTServiceError):
    """Raised when the recognition model cannot be loaded."""

    def __init__(self, model_path: str | Path, reason: str):
        self.model_path = str(model_path)
        self.reason = reason
        super().__init__(f"Failed to load model '{self.model_path}': {reason}")


class EmptyUploadError(STTServiceError):
    """Raised when the pipeline is handed an empty upload."""

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message)


class UnsupportedMediaError(STTServiceError):
    """Raised when the uploaded audio cannot be converted or decoded."""

    pass


class ConversionError(UnsupportedMediaError):
    """Raised when the audio converter exits with a non-zero status."""

    def __init__(
        self,
        returncode: int,
        output: str = "",
        message: str = "Unsupported audio or ffmpeg conversion failed",
    ):
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class UnsupportedAudioError(UnsupportedMediaError):
    """Raised when the normalized audio container cannot be parsed."""

    def __init__(self, message: str = "Unsupported audio file"):
        super().__init__(message)


class AudioIOError(STTServiceError):
    """Raised on filesystem or process failures while handling audio."""

    pass
