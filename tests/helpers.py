"""Shared test doubles and audio fixtures."""

import shutil
from pathlib import Path

import numpy as np
import soundfile as sf


HELLO_WORLD_RESULT = '{\n  "text" : "hello world"\n}'


class CopyNormalizer:
    """Normalizer double that copies the input instead of running ffmpeg."""

    def __init__(self, temp_dir: Path, replacement: bytes | None = None):
        self.temp_dir = temp_dir
        self.replacement = replacement
        self.calls: list[Path] = []

    def normalize(self, input_path: Path) -> Path:
        self.calls.append(input_path)
        output_path = self.temp_dir / f"converted-{len(self.calls)}.wav"
        if self.replacement is None:
            shutil.copyfile(input_path, output_path)
        else:
            output_path.write_bytes(self.replacement)
        return output_path


def make_wav_bytes(
    path: Path,
    sample_rate: int = 16000,
    channels: int = 1,
    duration: float = 1.0,
) -> bytes:
    """Write a 440 Hz 16-bit PCM tone to path and return the file's bytes."""
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    tone = (0.3 * np.sin(2 * np.pi * 440 * t) * 32767).astype(np.int16)
    if channels > 1:
        tone = np.column_stack([tone] * channels)
    sf.write(str(path), tone, sample_rate, subtype="PCM_16")
    return path.read_bytes()
