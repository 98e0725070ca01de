"""
Transcription endpoint.

Maps every pipeline outcome to an HTTP status and a TranscriptionResult body.
Only coarse messages reach the client; details stay in the server log.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from ...core.exceptions import AudioIOError, EmptyUploadError, UnsupportedMediaError
from ...core.logging import logger
from ...schemas.transcription import TranscriptionResult
from ...services.transcription import TranscriptionService
from ..deps import get_transcription_service

router = APIRouter()

NO_FILE_MESSAGE = "No file uploaded"
IO_ERROR_MESSAGE = "Internal error processing audio"
UNEXPECTED_ERROR_MESSAGE = "Unexpected server error"

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": TranscriptionResult, "description": "No file uploaded"},
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: {"model": TranscriptionResult, "description": "Audio could not be converted or decoded"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": TranscriptionResult, "description": "Server-side failure"},
}


def _respond(status_code: int, result: TranscriptionResult) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


@router.post(
    "/transcribe",
    response_model=TranscriptionResult,
    responses=_ERROR_RESPONSES,
    tags=["transcription"],
)
async def transcribe(
    file: Optional[UploadFile] = File(None),
    service: TranscriptionService = Depends(get_transcription_service),
):
    """
    Transcribe an uploaded audio file.

    Accepts any format ffmpeg can read in the multipart field "file".

    Returns:
        {"status": "ok", "transcript": "<recognizer JSON>"}
    """
    if file is None:
        logger.info("Transcription request without a file")
        return _respond(status.HTTP_400_BAD_REQUEST, TranscriptionResult.error(NO_FILE_MESSAGE))

    content = await file.read()
    logger.info(f"Received file: {file.filename} ({len(content)} bytes, {file.content_type})")

    if not content:
        return _respond(status.HTTP_400_BAD_REQUEST, TranscriptionResult.error(NO_FILE_MESSAGE))

    try:
        # Conversion and recognition block, keep them off the event loop
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, service.transcribe, content, file.filename)
    except EmptyUploadError as e:
        return _respond(status.HTTP_400_BAD_REQUEST, TranscriptionResult.error(str(e)))
    except UnsupportedMediaError as e:
        logger.warning(f"Unsupported input: {e}")
        return _respond(
            status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, TranscriptionResult.error(str(e))
        )
    except AudioIOError:
        logger.exception("IO error during transcription")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR, TranscriptionResult.error(IO_ERROR_MESSAGE)
        )
    except Exception:
        logger.exception("Unexpected error during transcription")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            TranscriptionResult.error(UNEXPECTED_ERROR_MESSAGE),
        )
    finally:
        await file.close()

    return result
