# vibename_backend/app/utils/image_payload.py
from __future__ import annotations

import base64
import binascii
import re

from vibename_backend.app.errors import InvalidInput

_DATA_URL_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)


def decode_image(payload: str, max_bytes: int) -> bytes:
    """
    Accept raw base64 or a data: URL (what browsers' FileReader produces).
    The bytes are forwarded untouched; no image parsing happens here.
    """
    body = _DATA_URL_PREFIX.sub("", payload.strip(), count=1)
    # cheap upper bound before decoding: 4 base64 chars -> 3 bytes
    if len(body) * 3 // 4 > max_bytes + 3:
        raise InvalidInput(f"Image is too large (max {max_bytes} bytes).")
    try:
        raw = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInput("Image must be base64-encoded.") from e
    if not raw:
        raise InvalidInput("Image is empty.")
    if len(raw) > max_bytes:
        raise InvalidInput(f"Image is too large (max {max_bytes} bytes).")
    return raw
