import json
import os
import time
from typing import Any, Dict, Optional

from relay_agent.env import AGENT_ID, AUDIT_LOG_PATH


def audit(event: str, job: Optional[Dict[str, Any]] = None, path: Optional[str] = None, **fields):
    """
    Append one JSON line per agent event. When a relay job is given its
    identity (id, printer, scope, payload type) is recorded with the event.
    """
    path = path or AUDIT_LOG_PATH
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    record: Dict[str, Any] = {
        "ts": time.time(),
        "agent_id": AGENT_ID or None,
        "event": event,
    }
    if job is not None:
        record["job_id"] = job.get("id")
        record["printer"] = job.get("printerName")
        record["scoped_to"] = job.get("agentId")
        record["type"] = job.get("type")
    record.update(fields)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
