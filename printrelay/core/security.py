import hmac
from typing import Optional

from fastapi import Header, Request

from printrelay.core.errors import InternalError, Unauthorized


def _matches(presented: Optional[str], expected: str) -> bool:
    if not presented:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)):
    """Client credential: X-API-Key header or ?apiKey= query parameter."""
    key = x_api_key or request.query_params.get("apiKey")
    if not _matches(key, request.app.state.api_key):
        raise Unauthorized("Unauthorized - invalid API key")


def verify_agent_token(request: Request, x_pairing_token: Optional[str] = Header(None)):
    """Agent credential: X-Pairing-Token header only."""
    expected = request.app.state.agent_token
    if not expected:
        raise InternalError("AGENT_TOKEN not configured on the relay")
    if not _matches(x_pairing_token, expected):
        raise Unauthorized("Unauthorized agent")
