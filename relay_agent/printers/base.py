from abc import ABC, abstractmethod
from typing import Any, Dict

from relay_agent.errors import PrintError


class PrinterProvider(ABC):
    """Local print backend. Implementations raise PrintError on failure."""

    @abstractmethod
    def list_printers(self) -> list[str]:
        pass

    @abstractmethod
    def print_raw(self, printer: str, data: bytes, title: str = "Print Relay Job"):
        pass

    def print_job(self, job: Dict[str, Any], data: bytes):
        """Send a relay job's decoded bytes to the printer it names."""
        printer = job.get("printerName")
        if not printer:
            raise PrintError(f"job {job['id']} has no printerName")
        self.print_raw(printer, data, title=f"relay-{job['id'][:8]}")
