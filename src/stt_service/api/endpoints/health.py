from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse, tags=["health"])
async def health_check() -> str:
    """
    Liveness check.

    Always returns "OK"; does not touch the model or the converter.
    """
    return "OK"
