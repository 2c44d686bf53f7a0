import asyncio
from abc import ABC, abstractmethod
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

from printrelay.models import PENDING, PROCESSING, Job, utcnow


class JobStore(ABC):
    """Storage seam for print jobs. Handlers only talk to this interface."""

    @abstractmethod
    async def put(self, job: Job) -> None:
        pass

    @abstractmethod
    async def get(self, job_id: str) -> Optional[Job]:
        pass

    @abstractmethod
    async def delete(self, job_id: str) -> bool:
        pass

    @abstractmethod
    async def values(self) -> List[Job]:
        pass

    @abstractmethod
    async def size(self) -> int:
        pass

    @abstractmethod
    async def select_pending(self, agent_id: Optional[str], limit: int, claim: bool = True) -> List[Job]:
        pass

    @abstractmethod
    async def update(self, job_id: str, **changes) -> Optional[Job]:
        pass

    @abstractmethod
    async def delete_expired(self, cutoff: datetime) -> List[str]:
        pass

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        pass


class MemoryJobStore(JobStore):
    """
    Process-local store. A dict keeps insertion order, which is the
    dispatch order (oldest pending first).

    Every method runs under one asyncio.Lock so scan-and-claim in dispatch
    and read-modify-write in ack can't interleave. Callers get copies, the
    stored records never leave the store.
    """

    def __init__(self):
        self._jobs: Dict[str, Job] = {}
        self._lock = asyncio.Lock()

    async def put(self, job: Job) -> None:
        async with self._lock:
            self._jobs[job.id] = job.model_copy(deep=True)

    async def get(self, job_id: str) -> Optional[Job]:
        async with self._lock:
            job = self._jobs.get(job_id)
            return job.model_copy(deep=True) if job else None

    async def delete(self, job_id: str) -> bool:
        async with self._lock:
            return self._jobs.pop(job_id, None) is not None

    async def values(self) -> List[Job]:
        async with self._lock:
            return [j.model_copy(deep=True) for j in self._jobs.values()]

    async def size(self) -> int:
        async with self._lock:
            return len(self._jobs)

    async def select_pending(self, agent_id: Optional[str], limit: int, claim: bool = True) -> List[Job]:
        selected: List[Job] = []
        if limit < 1:
            return selected

        async with self._lock:
            for job in self._jobs.values():
                if job.status != PENDING:
                    continue
                if job.agent_id and job.agent_id != agent_id:
                    continue
                if claim:
                    job.status = PROCESSING
                    job.updated_at = utcnow()
                selected.append(job.model_copy(deep=True))
                if len(selected) >= limit:
                    break
        return selected

    async def update(self, job_id: str, **changes) -> Optional[Job]:
        async with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            for field, value in changes.items():
                if field in ("id", "created_at"):
                    raise ValueError(f"{field} is immutable")
                setattr(job, field, value)
            return job.model_copy(deep=True)

    async def delete_expired(self, cutoff: datetime) -> List[str]:
        async with self._lock:
            expired = [job_id for job_id, job in self._jobs.items() if job.created_at < cutoff]
            for job_id in expired:
                del self._jobs[job_id]
            return expired

    async def count_by_status(self) -> Dict[str, int]:
        async with self._lock:
            return dict(Counter(job.status for job in self._jobs.values()))
