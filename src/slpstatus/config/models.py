"""
slpstatus - API Models

Pydantic request/response models used by the decode service.
"""

from pydantic import BaseModel, ConfigDict, Field

from slpstatus.core.errors import ErrorKind
from slpstatus.core.status import DecodedStatus, StatusRecord
from slpstatus.mods.modinfo import ModListExtension
from slpstatus.utils.text_utils import format_player_count

# =============================================================================
# Requests
# =============================================================================


class StatusPayload(BaseModel):
    """Raw status response text to decode"""

    content: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": '{"version":{"name":"1.8","protocol":47},'
                '"players":{"max":20,"online":5},"description":{"text":"Hi"}}'
            }
        }
    )


# =============================================================================
# Responses
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = "ok"
    version: str = ""


class DecodeErrorResponse(BaseModel):
    """Classified decode failure"""

    kind: ErrorKind
    field: str | None = None
    message: str


class StatusSummary(BaseModel):
    """Flattened view of a decoded status for display"""

    version: str
    protocol: int
    players: str
    sample: list[str] = []
    motd: str = ""
    has_icon: bool = False
    modded: bool = False
    mod_count: int = 0

    @classmethod
    def from_decoded(cls, decoded: DecodedStatus) -> "StatusSummary":
        status: StatusRecord = decoded.status
        mod_info: ModListExtension | None = decoded.mod_info
        return cls(
            version=status.version.name,
            protocol=status.version.protocol,
            players=format_player_count(status.players.online, status.players.max),
            sample=[p.name for p in status.players.sample],
            motd=status.description.to_plain_text(),
            has_icon=status.icon is not None,
            modded=mod_info is not None,
            mod_count=len(mod_info.mod_list) if mod_info else 0,
        )


class DecodeResponse(BaseModel):
    """Successful decode: the wire shape plus a summary"""

    success: bool = True
    status: dict
    modinfo: dict | None = None
    summary: StatusSummary


class ModListResponse(BaseModel):
    """Mod-list extension of a status response"""

    modded: bool
    type: str | None = None
    mods: list[dict] = Field(default_factory=list)
    count: int = 0
