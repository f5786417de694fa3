"""
Status decoding errors.

Every failure of the status decoder is reported as one of these exceptions.
They all derive from ValueError so callers that only care about "bad input"
can catch that.
"""

from enum import Enum

from pydantic import ValidationError


class ErrorKind(str, Enum):
    """Classification of a decode failure"""

    MALFORMED_JSON = "malformed_json"
    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_ICON = "invalid_icon"
    MALFORMED_MOD_ENTRY = "malformed_mod_entry"


class DecodeError(ValueError):
    """Base class for status decode failures"""

    kind: ErrorKind

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "field": self.field, "message": self.message}


class MalformedJsonError(DecodeError):
    kind = ErrorKind.MALFORMED_JSON

    def __init__(self, message: str) -> None:
        super().__init__(f"Malformed JSON: {message}")


class MissingFieldError(DecodeError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field '{field}'", field)


class TypeMismatchError(DecodeError):
    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, field: str, detail: str = "") -> None:
        message = f"Field '{field}' has the wrong type"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, field)


class InvalidIconError(DecodeError):
    kind = ErrorKind.INVALID_ICON

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid favicon: {message}", "favicon")


class MalformedModEntryError(DecodeError):
    kind = ErrorKind.MALFORMED_MOD_ENTRY

    def __init__(self, index: int, detail: str = "") -> None:
        message = f"Malformed mod entry at modinfo.modList[{index}]"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, f"modinfo.modList.{index}")
        self.index = index


def format_loc(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as a dotted field path"""
    return ".".join(str(part) for part in loc) or "(root)"


def from_validation_error(
    exc: ValidationError, prefix: tuple[int | str, ...] = ()
) -> DecodeError:
    """Translate the first pydantic error into a DecodeError.

    Errors come back in field declaration order, which is the order fields
    are checked in, so the first one is the one reported.
    """
    error = exc.errors()[0]
    ctx_error = error.get("ctx", {}).get("error")
    if isinstance(ctx_error, DecodeError):
        return ctx_error

    field = format_loc(prefix + tuple(error["loc"]))
    if error["type"] == "missing":
        return MissingFieldError(field)
    return TypeMismatchError(field, error["msg"])
