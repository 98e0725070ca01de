"""
Transcription pipeline.

Stages an upload to disk, normalizes it, streams the PCM into a fresh
recognizer session and returns the recognizer's final result verbatim.
"""

import time
from pathlib import Path
from typing import Optional

import soundfile as sf

from ..core.exceptions import AudioIOError, EmptyUploadError, UnsupportedAudioError
from ..core.logging import logger
from ..schemas.transcription import TranscriptionResult
from ..utils.file_ops import remove_file, safe_filename, write_temp_file
from .audio_normalizer import AudioNormalizer
from .recognition_engine import RecognitionEngine

BYTES_PER_SAMPLE = 2  # 16-bit PCM


class TranscriptionService:
    """
    Request-scoped transcription over a shared recognition engine.

    Holds no per-request state; one instance can serve concurrent requests.
    """

    def __init__(
        self,
        engine: RecognitionEngine,
        normalizer: AudioNormalizer,
        sample_rate: int = 16000,
        chunk_size: int = 4096,
        temp_dir: Optional[Path] = None,
    ):
        self.engine = engine
        self.normalizer = normalizer
        self.sample_rate = sample_rate
        self.chunk_size = chunk_size
        self.temp_dir = temp_dir

    def transcribe(self, data: bytes, filename: Optional[str] = None) -> TranscriptionResult:
        """
        Transcribe one uploaded audio file.

        Args:
            data: Raw bytes of the upload
            filename: Client-supplied filename, only used to name the temp file

        Returns:
            TranscriptionResult with status "ok" and the recognizer payload

        Raises:
            EmptyUploadError: data is empty
            ConversionError: ffmpeg rejected the input
            UnsupportedAudioError: the converted file could not be decoded
            AudioIOError: temp files or the converter process failed
        """
        if not data:
            raise EmptyUploadError()

        start_time = time.time()
        suffix = f"-{safe_filename(filename)}"

        upload_path = wav_path = None
        try:
            try:
                upload_path = write_temp_file(
                    data, prefix="upload-", suffix=suffix, directory=self.temp_dir
                )
            except OSError as e:
                raise AudioIOError(f"Could not stage upload: {e}") from e
            logger.debug(f"Staged {len(data)} bytes to {upload_path}")

            wav_path = self.normalizer.normalize(upload_path)
            payload = self._recognize(wav_path)
        finally:
            remove_file(upload_path)
            remove_file(wav_path)

        logger.info(
            f"Transcribed {filename or 'upload'} in {time.time() - start_time:.2f}s"
        )
        return TranscriptionResult.ok(payload)

    def _recognize(self, wav_path: Path) -> str:
        """Stream a normalized WAV file through a new recognizer session."""
        try:
            audio_file = sf.SoundFile(str(wav_path))
        except RuntimeError as e:
            logger.warning(f"Could not parse converted audio {wav_path.name}: {e}")
            raise UnsupportedAudioError() from e

        with audio_file:
            if audio_file.samplerate != self.sample_rate or audio_file.channels != 1:
                logger.warning(
                    f"Converted audio is {audio_file.samplerate}Hz/{audio_file.channels}ch, "
                    f"recognizer expects {self.sample_rate}Hz mono"
                )

            recognizer = self.engine.create_recognizer(self.sample_rate)
            frames_per_chunk = max(
                1, self.chunk_size // (BYTES_PER_SAMPLE * audio_file.channels)
            )

            for block in audio_file.blocks(blocksize=frames_per_chunk, dtype="int16"):
                # End-of-utterance flag is ignored; only the final result is returned
                recognizer.AcceptWaveform(block.tobytes())

            return recognizer.FinalResult()
