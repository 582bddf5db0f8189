from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from .. import config

router = APIRouter()


@router.get("/health")
def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION,
    }


@router.get("/user")
def legacy_user():
    """Old profile endpoint, kept only to point clients at /api/auth/me."""
    return JSONResponse(
        status_code=status.HTTP_410_GONE,
        content={
            "success": False,
            "message": "This endpoint is deprecated. Use /auth/me with Bearer token instead.",
            "code": "DEPRECATED_ENDPOINT",
        },
    )
