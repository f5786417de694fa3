"""
Mod List Router

FastAPI router for mod-list operations on raw status payloads:
- Extract the Forge mod list
- Look up a single mod's version
"""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from slpstatus.config.models import DecodeErrorResponse, ModListResponse, StatusPayload
from slpstatus.core.errors import DecodeError
from slpstatus.core.status import DecodedStatus, decode_status
from slpstatus.mods.modinfo import ModEntry

logger = logging.getLogger(__name__)


def decode_or_422(content: str) -> DecodedStatus:
    """Decode a payload, turning decode failures into HTTP 422"""
    try:
        return decode_status(content)
    except DecodeError as e:
        logger.warning("Rejected status payload: %s", e.message)
        raise HTTPException(
            status_code=422, detail=DecodeErrorResponse(**e.to_dict()).model_dump(mode="json")
        ) from e


def create_router(
    check_payload_dependency: Callable[..., Any],
    verify_token_dependency: Callable[..., Any],
) -> APIRouter:
    """Create and configure the mods router.

    Args:
        check_payload_dependency: Dependency that validates and returns the payload
        verify_token_dependency: Dependency function that verifies authentication

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter(prefix="/mods", tags=["Mods"])

    @router.post("", response_model=ModListResponse)
    def list_mods(
        payload: StatusPayload = Depends(check_payload_dependency),  # noqa: B008
        _auth: bool = Depends(verify_token_dependency),  # noqa: B008
    ) -> ModListResponse:
        """List the mods advertised in a status payload"""
        decoded = decode_or_422(payload.content)
        if decoded.mod_info is None:
            return ModListResponse(modded=False)
        return ModListResponse(
            modded=True,
            type=decoded.mod_info.type,
            mods=[m.model_dump(by_alias=True) for m in decoded.mod_info.mod_list],
            count=len(decoded.mod_info.mod_list),
        )

    @router.post("/{mod_id}", response_model=dict)
    def get_mod(
        mod_id: str,
        payload: StatusPayload = Depends(check_payload_dependency),  # noqa: B008
        _auth: bool = Depends(verify_token_dependency),  # noqa: B008
    ) -> dict:
        """Get one mod's version from a status payload"""
        decoded = decode_or_422(payload.content)
        if decoded.mod_info is None:
            raise HTTPException(status_code=404, detail="Server is not modded")
        entry: ModEntry | None = decoded.mod_info.find(mod_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Mod '{mod_id}' not found")
        return entry.model_dump(by_alias=True)

    return router
