import os
from dotenv import load_dotenv

load_dotenv()  # reads .env from the cwd


def _float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


RELAY_URL = os.getenv("RELAY_URL", "http://127.0.0.1:3000").rstrip("/")
AGENT_TOKEN = os.getenv("AGENT_TOKEN", "")
AGENT_ID = os.getenv("AGENT_ID", "")  # empty: only unscoped jobs

POLL_INTERVAL = _float("POLL_INTERVAL", 3.0)
POLL_LIMIT = int(_float("POLL_LIMIT", 5))
PRINT_TIMEOUT = _float("PRINT_TIMEOUT", 30.0)
HTTP_TIMEOUT = _float("HTTP_TIMEOUT", 10.0)

AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "./logs/audit.jsonl")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
