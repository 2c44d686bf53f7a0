import base64
import binascii
import codecs
import re
from typing import Any, Dict

from relay_agent.errors import PayloadError

_WHITESPACE = re.compile(r"\s+")


def _codec(name: str) -> str:
    try:
        return codecs.lookup(name).name
    except (LookupError, TypeError):
        return "utf-8"


def decode_payload(job: Dict[str, Any]) -> bytes:
    """Turn a relay job's payload into the raw bytes sent to the printer."""
    payload = job.get("payload") or ""
    kind = (job.get("type") or "text").lower()

    if kind == "base64":
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as e:
            raise PayloadError(f"Invalid base64 payload: {e}")

    if kind == "hex":
        try:
            return bytes.fromhex(_WHITESPACE.sub("", payload))
        except ValueError as e:
            raise PayloadError(f"Invalid hex payload: {e}")

    try:
        return payload.encode(_codec(job.get("encoding") or "utf8"), errors="replace")
    except LookupError:
        # bytes-to-bytes codecs (hex, zlib, rot13...) can't encode text
        return payload.encode("utf-8", errors="replace")
