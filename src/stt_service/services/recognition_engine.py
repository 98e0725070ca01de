"""
Recognition engine - owner of the loaded Vosk model.

One instance is created at application startup and shared read-only by every
request. Each request gets its own KaldiRecognizer bound to the shared model.
"""

import gc
import threading
from pathlib import Path
from typing import Optional

from vosk import KaldiRecognizer, Model, SetLogLevel

from ..core.exceptions import ModelLoadingError
from ..core.logging import logger


class RecognitionEngine:
    """
    Process-wide handle to a loaded Vosk model.

    The model is loaded once (at startup or lazily on first use) and never
    mutated afterwards, so concurrent recognizer sessions are safe.
    """

    def __init__(self, model_path: str | Path, log_level: int = -1):
        self.model_path = Path(model_path)
        self.log_level = log_level

        self._model: Optional[Model] = None
        self._closed = False
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def load(self) -> None:
        """
        Load the Vosk model (only once).

        Raises:
            ModelLoadingError: If the model directory is missing, Vosk rejects it,
                or the engine has already been closed
        """
        self._acquire_model()

    def _acquire_model(self) -> Model:
        """Return the loaded model, loading it under the lock on first use."""
        model = self._model
        if model is not None:
            return model

        with self._load_lock:
            if self._closed:
                raise ModelLoadingError(self.model_path, "engine has been closed")
            if self._model is not None:
                return self._model

            if not self.model_path.is_dir():
                raise ModelLoadingError(self.model_path, "model directory not found")

            logger.info(f"Loading Vosk model from {self.model_path}")
            SetLogLevel(self.log_level)

            try:
                self._model = Model(str(self.model_path))
            except Exception as e:
                logger.error(f"Model loading failed: {e}")
                raise ModelLoadingError(self.model_path, str(e)) from e

            logger.info("Vosk model loaded successfully")
            return self._model

    def create_recognizer(self, sample_rate: int) -> KaldiRecognizer:
        """
        Create a new recognizer session bound to the shared model.

        Loads the model first if startup did not. The session keeps its own
        reference to the model, so a concurrent close() cannot pull it away.

        Args:
            sample_rate: Sample rate of the PCM that will be fed, in Hz

        Returns:
            Fresh KaldiRecognizer, owned by the caller
        """
        model = self._acquire_model()
        return KaldiRecognizer(model, float(sample_rate))

    def close(self) -> None:
        """
        Release the model for graceful shutdown.

        Safe to call more than once. A closed engine does not load again.
        """
        with self._load_lock:
            self._closed = True
            if self._model is None:
                return

            logger.info("Releasing Vosk model...")
            self._model = None

        # Vosk frees the native model when the Python object is collected
        gc.collect()
        logger.info("Vosk model released")
