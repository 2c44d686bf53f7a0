import logging
from typing import Any, Dict, List, Optional

import requests

from relay_agent import env

logger = logging.getLogger(__name__)


class RelayClient:
    """HTTP side of the agent protocol: poll pending jobs, send acks."""

    def __init__(
        self,
        base_url: str = env.RELAY_URL,
        token: str = env.AGENT_TOKEN,
        agent_id: Optional[str] = env.AGENT_ID,
        timeout: float = env.HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.agent_id = agent_id or None
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        h: Dict[str, str] = {"Content-Type": "application/json"}
        if self.token:
            h["X-Pairing-Token"] = self.token
        return h

    def fetch_pending(self, limit: int = env.POLL_LIMIT) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"limit": limit}
        if self.agent_id:
            params["agentId"] = self.agent_id
        r = self.session.get(
            f"{self.base_url}/api/print/jobs/pending",
            params=params, headers=self._headers(), timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json().get("jobs") or []

    def ack(
        self,
        job_id: str,
        status: str,
        result: Any = None,
        error_detail: Any = None,
    ) -> None:
        body: Dict[str, Any] = {"status": status}
        if result is not None:
            body["result"] = result
        if error_detail is not None:
            body["errorDetail"] = error_detail
        r = self.session.post(
            f"{self.base_url}/api/print/jobs/{job_id}/ack",
            json=body, headers=self._headers(), timeout=self.timeout,
        )
        r.raise_for_status()
