import logging
import subprocess

from relay_agent.env import PRINT_TIMEOUT
from relay_agent.errors import PrintError
from relay_agent.printers.base import PrinterProvider

logger = logging.getLogger(__name__)


class CupsPrinterProvider(PrinterProvider):
    """CUPS (Linux/macOS): lpstat to list, lp -o raw to print."""

    def __init__(self, timeout: float = PRINT_TIMEOUT):
        self.timeout = timeout

    def list_printers(self):
        try:
            out = subprocess.run(
                ["lpstat", "-a"], stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                check=False, timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("lpstat failed: %s", e)
            return []
        text = out.stdout.decode(errors="ignore")
        return [line.split()[0] for line in text.splitlines() if line.strip()]

    def print_raw(self, printer, data: bytes, title: str = "Print Relay Job"):
        cmd = ["lp", "-d", printer, "-t", title, "-o", "raw"]
        # run() kills the child on timeout before re-raising
        try:
            proc = subprocess.run(
                cmd, input=data, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise PrintError(f"lp timed out after {self.timeout}s for printer {printer}")
        except OSError as e:
            raise PrintError(f"Command execution error: {e}")

        if proc.returncode != 0:
            stderr = proc.stderr.decode(errors="ignore").strip()
            raise PrintError(f"lp failed ({proc.returncode}): {stderr}")
        return proc.stdout.decode(errors="ignore").strip()
