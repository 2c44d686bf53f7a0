from fastapi import Request

from printrelay.services.job_store import JobStore


def get_store(request: Request) -> JobStore:
    return request.app.state.store
