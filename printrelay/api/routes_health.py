from fastapi import APIRouter, Depends

from printrelay.api.deps import get_store
from printrelay.models import DONE, ERROR, PENDING, PROCESSING, utcnow
from printrelay.services.job_store import JobStore

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(store: JobStore = Depends(get_store)):
    counts = await store.count_by_status()
    return {
        "status": "ok",
        "time": utcnow().isoformat(),
        "stats": {
            "totalJobs": sum(counts.values()),
            "pendingJobs": counts.get(PENDING, 0),
            "processingJobs": counts.get(PROCESSING, 0),
            "completedJobs": counts.get(DONE, 0),
            "errorJobs": counts.get(ERROR, 0),
        },
    }
