"""
Server-list-ping status response decoding.

Turns the JSON text a server returns for a status request into an immutable
StatusRecord, plus the optional Forge mod-list extension. The decoder is pure:
it performs no I/O, holds no state and never logs. Failures are raised as
DecodeError subclasses and a failed decode never yields a partial record.
"""

import json
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from slpstatus.core.chat import Message, parse_message
from slpstatus.core.errors import (
    DecodeError,
    MalformedJsonError,
    TypeMismatchError,
    from_validation_error,
)
from slpstatus.core.icon import ServerIcon, decode_favicon
from slpstatus.mods.modinfo import MODINFO_KEY, ModListExtension, parse_mod_info

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
STATUS_KEYS = ("version", "players", "description", "favicon")


# =============================================================================
# Models
# =============================================================================


class VersionInfo(BaseModel):
    """Server version name and protocol number"""

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    protocol: StrictInt = Field(ge=INT32_MIN, le=INT32_MAX)


class SampledPlayer(BaseModel):
    """One entry of the online player sample"""

    model_config = ConfigDict(frozen=True)

    id: StrictStr
    name: StrictStr


class PlayerInfo(BaseModel):
    """Player counts and sample.

    `online` may exceed `max`; servers report what they like.
    """

    model_config = ConfigDict(frozen=True)

    max: StrictInt = Field(ge=0)
    online: StrictInt = Field(ge=0)
    sample: tuple[SampledPlayer, ...] = ()


class StatusRecord(BaseModel):
    """Decoded server status"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: VersionInfo
    players: PlayerInfo
    description: Message
    icon: ServerIcon | None = Field(default=None, alias="favicon")

    @field_validator("description", mode="before")
    @classmethod
    def _parse_description(cls, v: Any) -> Message:
        if isinstance(v, Message):
            return v
        try:
            return parse_message(v)
        except ValueError as e:
            raise TypeMismatchError("description", str(e)) from e
        except RecursionError as e:
            raise TypeMismatchError("description", "components nested too deep") from e

    @field_validator("icon", mode="before")
    @classmethod
    def _decode_icon(cls, v: Any) -> ServerIcon:
        if isinstance(v, ServerIcon):
            return v
        if not isinstance(v, str):
            raise TypeMismatchError("favicon", "expected a string")
        return decode_favicon(v)


class DecodedStatus(BaseModel):
    """Status record plus the mod-list extension, when the server sent one"""

    model_config = ConfigDict(frozen=True)

    status: StatusRecord
    mod_info: ModListExtension | None = None

    @property
    def is_modded(self) -> bool:
        return self.mod_info is not None


# =============================================================================
# Decoding
# =============================================================================


def _reject_constant(name: str) -> Any:
    raise MalformedJsonError(f"non-standard literal {name}")


def _load_object(raw: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedJsonError(str(e)) from e
    except RecursionError as e:
        raise MalformedJsonError("nesting too deep") from e
    if not isinstance(payload, dict):
        raise TypeMismatchError("(root)", "expected a JSON object")
    return payload


def decode_status(raw: str) -> DecodedStatus:
    """Decode a raw status response.

    Args:
        raw: The JSON text as read off the wire

    Returns:
        DecodedStatus with the record and optional mod-list extension

    Raises:
        DecodeError: MalformedJsonError, MissingFieldError, TypeMismatchError,
            InvalidIconError or MalformedModEntryError
    """
    payload = _load_object(raw)
    # Only wire names are read; field names like "icon" are not wire keys
    fields = {key: payload[key] for key in STATUS_KEYS if key in payload}

    try:
        status = StatusRecord.model_validate(fields)
    except ValidationError as e:
        raise from_validation_error(e) from None

    mod_info = parse_mod_info(payload[MODINFO_KEY]) if MODINFO_KEY in payload else None
    return DecodedStatus(status=status, mod_info=mod_info)


def try_decode_status(raw: str) -> tuple[bool, DecodedStatus | None, str | None]:
    """Decode without raising.

    For callers that choose to carry on past a bad payload.

    Returns:
        Tuple of (success, decoded status or None, error message or None)
    """
    try:
        return True, decode_status(raw), None
    except DecodeError as e:
        return False, None, e.message


# =============================================================================
# Encoding
# =============================================================================


def encode_status(decoded: DecodedStatus) -> str:
    """Render a decoded status back to wire JSON"""
    status = decoded.status
    players: dict[str, Any] = {"max": status.players.max, "online": status.players.online}
    if status.players.sample:
        players["sample"] = [p.model_dump() for p in status.players.sample]

    data: dict[str, Any] = {
        "version": status.version.model_dump(),
        "players": players,
        "description": status.description.to_json(),
    }
    if status.icon is not None:
        data["favicon"] = status.icon.to_data_uri()
    if decoded.mod_info is not None:
        data[MODINFO_KEY] = decoded.mod_info.to_json()

    return json.dumps(data, ensure_ascii=False)
