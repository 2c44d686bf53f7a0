import json
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from pydantic import ValidationError

from printrelay.api.deps import get_store
from printrelay.core.errors import BadRequest, NotFound
from printrelay.core.security import require_api_key, verify_agent_token
from printrelay.models import Job, parse_int, utcnow
from printrelay.services.job_store import JobStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/print/jobs", tags=["jobs"])

# ack body key -> Job attribute
_ACK_FIELDS = {"status": "status", "result": "result", "errorDetail": "error_detail"}


async def _json_object(request: Request) -> Dict[str, Any]:
    """Body parsed after the route's credential dependency has run."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise BadRequest("Invalid request")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Invalid request")
    return data


def _ack_status(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise BadRequest("status must be a string")


# --------------------------------------------------
# Client: submit a job
# --------------------------------------------------
@router.post("", dependencies=[Depends(require_api_key)])
async def create_job(
    request: Request,
    user_agent: Optional[str] = Header(None),
    store: JobStore = Depends(get_store),
):
    data = await _json_object(request)
    if not data.get("printerName") or not data.get("payload"):
        raise BadRequest("printerName and payload required")

    try:
        job = Job.from_submission(data, client_info=user_agent)
    except ValidationError as e:
        raise BadRequest(f"invalid job: {e.errors()[0]['msg']}")
    await store.put(job)
    logger.info("Job created: %s for printer: %s (agent=%s)", job.id, job.printer_name, job.agent_id or "*")
    return {"success": True, "jobId": job.id, "job": job.to_dict()}


# --------------------------------------------------
# Agent: poll pending jobs
# --------------------------------------------------
@router.get("/pending", dependencies=[Depends(verify_agent_token)])
async def pending_jobs(
    request: Request,
    agent_id: Optional[str] = Query(None, alias="agentId"),
    limit: Optional[str] = Query(None),
    store: JobStore = Depends(get_store),
):
    state = request.app.state
    n = parse_int(limit, state.default_poll_limit)
    if n < 1:
        n = state.default_poll_limit
    n = min(n, state.max_poll_limit)

    jobs = await store.select_pending(agent_id or None, n, claim=state.claim_on_dispatch)
    if jobs:
        logger.info(
            "Dispatched %d job(s) to agent=%s%s",
            len(jobs), agent_id or "*", " (claimed)" if state.claim_on_dispatch else "",
        )
    return {"success": True, "jobs": [j.to_dict() for j in jobs]}


# --------------------------------------------------
# Agent: acknowledge a job
# --------------------------------------------------
@router.post("/{job_id}/ack", dependencies=[Depends(verify_agent_token)])
async def ack_job(
    job_id: str,
    request: Request,
    store: JobStore = Depends(get_store),
):
    data = await _json_object(request)
    # status strings are stored as sent, scalars stringified
    changes = {
        attr: data[key]
        for key, attr in _ACK_FIELDS.items()
        if data.get(key) is not None and data.get(key) != ""
    }
    if "status" in changes:
        changes["status"] = _ack_status(changes["status"])
    changes["updated_at"] = utcnow()

    job = await store.update(job_id, **changes)
    if job is None:
        raise NotFound()

    logger.info("Job %s acknowledged: status=%s", job_id, job.status)
    return {"success": True}


# --------------------------------------------------
# Public: job lookup
# --------------------------------------------------
@router.get("/{job_id}")
async def get_job(job_id: str, store: JobStore = Depends(get_store)):
    job = await store.get(job_id)
    if job is None:
        raise NotFound()
    return {"success": True, "job": job.to_dict()}
