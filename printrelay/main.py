import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

import uvicorn
from fastapi import FastAPI

from printrelay import __version__, config
from printrelay.api import routes_health, routes_jobs
from printrelay.core.cors import install_cors
from printrelay.core.errors import register_error_handlers
from printrelay.services.job_store import JobStore, MemoryJobStore
from printrelay.services.sweeper import ExpirySweeper

logger = logging.getLogger("print_relay")


def create_app(
    store: Optional[JobStore] = None,
    *,
    api_key: str = config.API_KEY,
    agent_token: str = config.AGENT_TOKEN,
    allowed_origins: Iterable[str] = config.ALLOWED_ORIGINS,
    job_ttl_seconds: float = config.JOB_TTL_SECONDS,
    sweep_interval_seconds: float = config.SWEEP_INTERVAL_SECONDS,
    default_poll_limit: int = config.DEFAULT_POLL_LIMIT,
    max_poll_limit: int = config.MAX_POLL_LIMIT,
    claim_on_dispatch: bool = config.CLAIM_ON_DISPATCH,
) -> FastAPI:
    store = store or MemoryJobStore()
    sweeper = ExpirySweeper(store, ttl_seconds=job_ttl_seconds, interval_seconds=sweep_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        logger.info("Print relay %s ready (claim_on_dispatch=%s)", __version__, claim_on_dispatch)
        try:
            yield
        finally:
            await sweeper.stop()

    app = FastAPI(title="Print Relay", version=__version__, lifespan=lifespan)
    app.state.store = store
    app.state.sweeper = sweeper
    app.state.api_key = api_key
    app.state.agent_token = agent_token
    app.state.default_poll_limit = default_poll_limit
    app.state.max_poll_limit = max_poll_limit
    app.state.claim_on_dispatch = claim_on_dispatch

    register_error_handlers(app)
    install_cors(app, allowed_origins)

    app.include_router(routes_jobs.router)
    app.include_router(routes_health.router)
    return app


app = create_app()


def run():
    logging.basicConfig(level=config.LOG_LEVEL)
    logger.info("Print relay listening on %s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
