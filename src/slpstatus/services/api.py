#!/usr/bin/env python3
"""
Status Decode API

HTTP front end for the status decoder:
- Decode a raw status response into structured JSON
- Extract the Forge mod list
- Health check
"""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from slpstatus.config import settings
from slpstatus.config.models import (
    DecodeResponse,
    HealthResponse,
    StatusPayload,
    StatusSummary,
)
from slpstatus.core.status import encode_status
from slpstatus.mods import router as mods_router
from slpstatus.mods.modinfo import MODINFO_KEY

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup/shutdown"""
    logger.info("Status decode API starting...")
    yield
    logger.info("Status decode API shutting down...")


# =============================================================================
# Application
# =============================================================================

app = FastAPI(
    title="Status Decode API",
    description="Decode server-list-ping status responses",
    version=API_VERSION,
    lifespan=lifespan,
)


# =============================================================================
# Dependencies
# =============================================================================


def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),  # noqa: B008
) -> bool:
    """Verify bearer token if authentication is enabled"""
    if settings.API_AUTH_DISABLED:
        return True
    if not settings.API_TOKEN:
        return True
    if not credentials or credentials.credentials != settings.API_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid or missing token")
    return True


def check_payload(payload: StatusPayload) -> StatusPayload:
    """Reject payloads longer than the protocol allows"""
    if len(payload.content) > settings.MAX_STATUS_LENGTH:
        raise HTTPException(
            status_code=413,
            detail=f"Status payload exceeds {settings.MAX_STATUS_LENGTH} characters",
        )
    return payload


router_mods = mods_router.create_router(check_payload, verify_token)
app.include_router(router_mods)


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint"""
    return HealthResponse(status="ok", version=API_VERSION)


@app.post("/status/decode", response_model=DecodeResponse, tags=["Status"])
def decode(
    payload: StatusPayload = Depends(check_payload),  # noqa: B008
    _auth: bool = Depends(verify_token),  # noqa: B008
) -> DecodeResponse:
    """Decode a raw status response"""
    decoded = mods_router.decode_or_422(payload.content)
    wire = json.loads(encode_status(decoded))
    modinfo = wire.pop(MODINFO_KEY, None)
    summary = StatusSummary.from_decoded(decoded)
    logger.info(
        "Decoded status: %s (protocol %d), %s players",
        summary.version,
        summary.protocol,
        summary.players,
    )
    return DecodeResponse(status=wire, modinfo=modinfo, summary=summary)


class HealthCheckFilter(logging.Filter):
    """Filter health check requests from access logs"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return "/health" not in message


# Apply filter to uvicorn access logger
logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    import uvicorn

    settings.configure_logging()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
