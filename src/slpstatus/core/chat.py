"""
Rich-text message components.

The status `description` is a chat component: a plain string, a component
object with text, style and children, or an array whose first element is the
parent of the rest. This module turns any of those into an immutable Message
tree and back.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from slpstatus.utils.text_utils import strip_formatting_codes

STYLE_KEYS = ("color", "bold", "italic", "underlined", "strikethrough", "obfuscated")
MAX_COMPONENT_DEPTH = 64


class Message(BaseModel):
    """One chat component and its children"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: StrictStr = ""
    translate: StrictStr | None = None
    with_: tuple[Message, ...] = Field(default=(), alias="with")
    color: StrictStr | None = None
    bold: StrictBool | None = None
    italic: StrictBool | None = None
    underlined: StrictBool | None = None
    strikethrough: StrictBool | None = None
    obfuscated: StrictBool | None = None
    extra: tuple[Message, ...] = ()

    def is_plain(self) -> bool:
        """True when the component carries nothing but text"""
        return (
            self.translate is None
            and not self.with_
            and not self.extra
            and all(getattr(self, key) is None for key in STYLE_KEYS)
        )

    def _flatten(self) -> str:
        own = self.text
        if not own and self.translate:
            args = ", ".join(arg._flatten() for arg in self.with_)
            own = f"{self.translate}({args})" if args else self.translate
        return own + "".join(child._flatten() for child in self.extra)

    def to_plain_text(self) -> str:
        """Flatten the tree to display text without formatting codes"""
        return strip_formatting_codes(self._flatten())

    def to_json(self) -> str | dict[str, Any]:
        """Render back to a JSON-compatible value"""
        if self.is_plain():
            return self.text

        data: dict[str, Any] = {"text": self.text}
        if self.translate is not None:
            data["translate"] = self.translate
        if self.with_:
            data["with"] = [arg.to_json() for arg in self.with_]
        for key in STYLE_KEYS:
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.extra:
            data["extra"] = [child.to_json() for child in self.extra]
        return data


def _parse_components(values: Any, name: str, depth: int) -> tuple[Message, ...]:
    if not isinstance(values, list):
        raise ValueError(f"'{name}' must be an array of components")
    return tuple(parse_message(v, depth + 1) for v in values)


def _parse_object(value: dict[str, Any], depth: int) -> Message:
    data: dict[str, Any] = {key: value[key] for key in STYLE_KEYS if key in value}
    data["text"] = value.get("text", "")
    if "translate" in value:
        data["translate"] = value["translate"]
    if "with" in value:
        data["with"] = _parse_components(value["with"], "with", depth)
    if "extra" in value:
        data["extra"] = _parse_components(value["extra"], "extra", depth)
    return Message.model_validate(data)


def parse_message(value: Any, depth: int = 0) -> Message:
    """Parse a JSON chat component into a Message.

    Raises:
        ValueError: if the value is not a usable component or nests deeper
            than MAX_COMPONENT_DEPTH (pydantic's ValidationError is a
            ValueError too)
    """
    if depth > MAX_COMPONENT_DEPTH:
        raise ValueError(f"Components nested deeper than {MAX_COMPONENT_DEPTH} levels")
    if isinstance(value, str):
        return Message(text=value)
    if isinstance(value, bool):
        return Message(text="true" if value else "false")
    if isinstance(value, (int, float)):
        return Message(text=str(value))
    if isinstance(value, dict):
        return _parse_object(value, depth)
    if isinstance(value, list):
        if not value:
            raise ValueError("Empty component array")
        parent = parse_message(value[0], depth + 1)
        children = tuple(parse_message(v, depth + 1) for v in value[1:])
        return parent.model_copy(update={"extra": parent.extra + children})
    raise ValueError(f"Unsupported component type: {type(value).__name__}")
