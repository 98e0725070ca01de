"""
Audio normalization via ffmpeg.

Converts any input ffmpeg understands into 16 kHz mono WAV so it can be fed
straight into the recognizer.
"""

import _thread
import subprocess  # nosec B404
import threading
from pathlib import Path
from typing import List, Optional, Protocol

from ..core.exceptions import AudioIOError, ConversionError
from ..core.logging import logger
from ..utils.file_ops import remove_file, reserve_temp_path


class AudioNormalizer(Protocol):
    """Anything that turns an audio file into a normalized WAV file."""

    def normalize(self, input_path: Path) -> Path:
        """Return the path of a new normalized file. The caller owns it."""
        ...


class FFmpegNormalizer:
    """
    Normalizer backed by the ffmpeg command line tool.

    Success is decided by the exit code alone; ffmpeg's output is logged for
    diagnostics and never returned to the caller.
    """

    def __init__(
        self,
        binary: str = "ffmpeg",
        sample_rate: int = 16000,
        channels: int = 1,
        temp_dir: Optional[Path] = None,
    ):
        self.binary = binary
        self.sample_rate = sample_rate
        self.channels = channels
        self.temp_dir = temp_dir

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        return [
            self.binary,
            "-y",
            "-i", str(input_path),
            "-ar", str(self.sample_rate),
            "-ac", str(self.channels),
            "-f", "wav",
            str(output_path),
        ]

    def normalize(self, input_path: Path) -> Path:
        """
        Convert input_path to a fresh WAV temp file.

        Args:
            input_path: Audio file to convert

        Returns:
            Path to the converted file

        Raises:
            ConversionError: ffmpeg exited with a non-zero status
            AudioIOError: ffmpeg could not be started, or the wait was interrupted
        """
        try:
            output_path = reserve_temp_path(
                prefix="converted-", suffix=".wav", directory=self.temp_dir
            )
        except OSError as e:
            raise AudioIOError(f"Could not create conversion output file: {e}") from e

        try:
            returncode, output = self._run(self.build_command(input_path, output_path))
        except BaseException:
            remove_file(output_path)
            raise

        if returncode != 0:
            logger.warning(f"ffmpeg returned code {returncode} and output: {output}")
            remove_file(output_path)
            raise ConversionError(returncode, output)

        logger.debug(f"ffmpeg converted {input_path.name} -> {output_path.name}: {output}")
        return output_path

    def _run(self, command: List[str]) -> tuple[int, str]:
        """Run ffmpeg with stderr merged into stdout and wait for it to exit."""
        try:
            process = subprocess.Popen(  # nosec B603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            logger.error(f"Failed to start {self.binary}: {e}")
            raise AudioIOError(f"Could not start audio converter: {e}") from e

        try:
            stdout, _ = process.communicate()
        except KeyboardInterrupt as e:
            process.kill()
            process.wait()
            if threading.current_thread() is not threading.main_thread():
                # Worker threads never see SIGINT; forward it so shutdown can proceed
                _thread.interrupt_main()
            raise AudioIOError("Audio conversion interrupted") from e

        return process.returncode, stdout.decode("utf-8", errors="replace")
