"""
Pytest configuration and fixtures
"""

import base64
import io
import json
from collections.abc import Callable
from typing import Any

import pytest
from PIL import Image

from slpstatus.core.icon import FAVICON_PREFIX


def png_bytes(width: int = 64, height: int = 64, color: tuple = (200, 30, 30, 255)) -> bytes:
    """Render a solid RGBA PNG of the given size"""
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def favicon(width: int = 64, height: int = 64, prefix: bool = True) -> str:
    encoded = base64.b64encode(png_bytes(width, height)).decode("ascii")
    return FAVICON_PREFIX + encoded if prefix else encoded


@pytest.fixture
def base_payload() -> dict[str, Any]:
    """Minimal valid status response"""
    return {
        "version": {"name": "1.8", "protocol": 47},
        "players": {"max": 20, "online": 5},
        "description": {"text": "Hi"},
    }


@pytest.fixture
def make_raw(base_payload: dict[str, Any]) -> Callable[..., str]:
    """Build raw JSON from the base payload with top-level overrides.

    Passing a value of None removes the key.
    """

    def _make(**overrides: Any) -> str:
        data = dict(base_payload)
        for key, value in overrides.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        return json.dumps(data)

    return _make


@pytest.fixture
def forge_modinfo() -> dict[str, Any]:
    return {
        "type": "FML",
        "modList": [
            {"modid": "minecraft", "version": "1.12.2"},
            {"modid": "forge", "version": "14.23"},
            {"modid": "jei", "version": "4.16.1"},
        ],
    }
