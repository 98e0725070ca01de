"""
Speech transcription service.

Accepts uploaded audio over HTTP, normalizes it with ffmpeg and returns the
Vosk recognition result as JSON.
"""

__version__ = "1.0.0"
