"""
Server icon (favicon) decoding and validation.

The status favicon is a base64 PNG, normally wrapped in a data URI. Only
existence, integrity and size are checked here; no image processing is done.
"""

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from slpstatus.core.errors import InvalidIconError

FAVICON_PREFIX = "data:image/png;base64,"
ICON_SIZE = 64


class ServerIcon(BaseModel):
    """Validated 64x64 PNG server icon"""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    width: int = ICON_SIZE
    height: int = ICON_SIZE

    def to_image(self) -> Image.Image:
        """Open the icon as a Pillow image"""
        return Image.open(io.BytesIO(self.data))

    def to_data_uri(self) -> str:
        """Render as the favicon string used on the wire"""
        return FAVICON_PREFIX + base64.b64encode(self.data).decode("ascii")


def _strip_prefix(value: str) -> str:
    if value.startswith(FAVICON_PREFIX):
        return value[len(FAVICON_PREFIX) :]
    return value


def decode_favicon(value: str) -> ServerIcon:
    """Decode a favicon string into a ServerIcon.

    The data URI prefix is optional. Whitespace inside the base64 text is
    ignored (some servers wrap the payload).

    Raises:
        InvalidIconError: bad base64, bytes that are not a PNG, a damaged PNG,
            or an image that is not exactly 64x64
    """
    payload = "".join(_strip_prefix(value).split())
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidIconError(f"bad base64 data ({e})") from e
    if not data:
        raise InvalidIconError("empty image data")

    try:
        with Image.open(io.BytesIO(data), formats=["PNG"]) as image:
            width, height = image.size
            # Size comes from the header; pixels are only decoded for a 64x64 image
            if (width, height) == (ICON_SIZE, ICON_SIZE):
                image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise InvalidIconError(f"not a PNG image ({e})") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise InvalidIconError(f"damaged PNG data ({e})") from e

    if (width, height) != (ICON_SIZE, ICON_SIZE):
        raise InvalidIconError(f"icon must be {ICON_SIZE}x{ICON_SIZE}, got {width}x{height}")

    return ServerIcon(data=data, width=width, height=height)
