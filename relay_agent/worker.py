import logging
import threading
from typing import Any, Dict

import requests

from relay_agent import env
from relay_agent.audit import audit
from relay_agent.client import RelayClient
from relay_agent.errors import AgentError
from relay_agent.payload import decode_payload
from relay_agent.printers.base import PrinterProvider

logger = logging.getLogger("relay_agent")


class PollWorker:
    def __init__(
        self,
        client: RelayClient,
        printer: PrinterProvider,
        poll_interval: float = env.POLL_INTERVAL,
        poll_limit: int = env.POLL_LIMIT,
        audit_fn=audit,
    ):
        self.client = client
        self.printer = printer
        self.poll_interval = poll_interval
        self.poll_limit = poll_limit
        self.audit = audit_fn
        self._stop = threading.Event()

    def process(self, job: Dict[str, Any]) -> bool:
        """Print one job and ack the outcome. Returns True when printed."""
        job_id = job["id"]
        printer_name = job.get("printerName")
        self.audit("job_printing", job)

        try:
            data = decode_payload(job)
            self.printer.print_job(job, data)
        except AgentError as e:
            return self._fail(job, str(e))
        except Exception as e:
            logger.exception("Job %s printing error", job_id)
            return self._fail(job, f"{type(e).__name__}: {e}")

        logger.info("Job %s printed on %s (%d bytes)", job_id, printer_name, len(data))
        self.audit("job_done", job, bytes=len(data))
        self._ack(job_id, "done", result="printed")
        return True

    def _fail(self, job: Dict[str, Any], message: str) -> bool:
        logger.error("Job %s failed: %s", job["id"], message)
        self.audit("job_error", job, error=message)
        self._ack(job["id"], "error", error_detail=message)
        return False

    def _ack(self, job_id: str, status: str, **kwargs):
        try:
            self.client.ack(job_id, status, **kwargs)
        except requests.RequestException as e:
            # the relay's TTL eventually drops the job
            logger.warning("Ack %s for job %s failed: %s", status, job_id, e)

    def run_once(self) -> int:
        """One poll cycle. Returns the number of jobs handled."""
        try:
            jobs = self.client.fetch_pending(self.poll_limit)
        except requests.RequestException as e:
            logger.warning("Poll failed: %s", e)
            return 0

        for job in jobs:
            self.process(job)
        return len(jobs)

    def run_forever(self):
        logger.info("Worker started, polling %s every %s seconds", self.client.base_url, self.poll_interval)
        while not self._stop.is_set():
            try:
                handled = self.run_once()
            except Exception:
                logger.exception("Worker unexpected error")
                handled = 0
            if not handled:
                self._stop.wait(self.poll_interval)
        logger.info("Worker stopped")

    def stop(self):
        self._stop.set()
