"""
Forge mod-list extension.

Modded servers append a `modinfo` block to the status response:

    "modinfo": {"type": "FML", "modList": [{"modid": "forge", "version": "14.23"}]}

Its absence is normal; a present block must be well formed.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from slpstatus.core.errors import (
    DecodeError,
    MalformedModEntryError,
    TypeMismatchError,
    from_validation_error,
)

MODINFO_KEY = "modinfo"


class ModEntry(BaseModel):
    """A single installed mod"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mod_id: StrictStr = Field(alias="modid", min_length=1)
    version: StrictStr = Field(min_length=1)


class ModListExtension(BaseModel):
    """Mod list advertised by a modded server"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: StrictStr
    mod_list: tuple[ModEntry, ...] = Field(alias="modList")

    def find(self, mod_id: str) -> ModEntry | None:
        """Return the first entry with the given mod id"""
        return next((m for m in self.mod_list if m.mod_id == mod_id), None)

    def to_json(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "modList": [entry.model_dump(by_alias=True) for entry in self.mod_list],
        }


def _translate(exc: ValidationError) -> DecodeError:
    error = exc.errors()[0]
    loc = tuple(error["loc"])
    if len(loc) >= 2 and loc[0] == "modList" and isinstance(loc[1], int):
        detail = error["msg"] if len(loc) == 2 else f"'{loc[2]}': {error['msg']}"
        return MalformedModEntryError(loc[1], detail)
    return from_validation_error(exc, prefix=(MODINFO_KEY,))


def _wire_keys(value: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    return {key: value[key] for key in keys if key in value}


def parse_mod_info(value: Any) -> ModListExtension:
    """Validate a `modinfo` block.

    Raises:
        MalformedModEntryError: a modList element is not an object or lacks a
            non-empty `modid`/`version`
        MissingFieldError, TypeMismatchError: the block itself is malformed
    """
    if not isinstance(value, dict):
        raise TypeMismatchError(MODINFO_KEY, "expected an object")
    data = _wire_keys(value, ("type", "modList"))
    if isinstance(data.get("modList"), list):
        data["modList"] = [
            _wire_keys(entry, ("modid", "version")) if isinstance(entry, dict) else entry
            for entry in data["modList"]
        ]
    try:
        return ModListExtension.model_validate(data)
    except ValidationError as e:
        raise _translate(e) from None
