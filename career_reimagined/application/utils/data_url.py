from __future__ import annotations

import base64
import binascii
import re

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<b64>;base64)?,(?P<data>.*)$", re.DOTALL)


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_url(url: str) -> tuple[str, bytes]:
    """Return (mime_type, payload) for a base64 data URL. Raises ValueError otherwise."""
    m = _DATA_URL_RE.match((url or "").strip())
    if not m or not m.group("b64"):
        raise ValueError("Expected a base64 data URL.")
    try:
        payload = base64.b64decode(m.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 payload in data URL: {e}") from e
    return m.group("mime") or "application/octet-stream", payload
