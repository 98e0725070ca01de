"""
Transcription schemas.

Pydantic models for the transcription response body.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TranscriptionStatus(str, Enum):
    """Outcome of a transcription request."""

    OK = "ok"
    ERROR = "error"


class TranscriptionResult(BaseModel):
    """
    Result of one transcription request.

    Attributes:
        status: "ok" on success, "error" otherwise
        transcript: Raw recognizer payload on success, or an error message
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "status": "ok",
                "transcript": '{"text" : "hello world"}',
            }
        },
    )

    status: TranscriptionStatus = Field(..., description="Request outcome")
    transcript: str = Field(..., description="Recognizer payload or error message")

    @classmethod
    def ok(cls, payload: str) -> "TranscriptionResult":
        return cls(status=TranscriptionStatus.OK, transcript=payload)

    @classmethod
    def error(cls, message: str) -> "TranscriptionResult":
        return cls(status=TranscriptionStatus.ERROR, transcript=message)
