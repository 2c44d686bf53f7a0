import os
from dotenv import load_dotenv

load_dotenv()  # reads .env from the cwd


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# -----------------------------
# Server
# -----------------------------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# -----------------------------
# Credentials (two independent namespaces)
# -----------------------------
API_KEY = os.getenv("API_KEY", "secret-api-key")
AGENT_TOKEN = os.getenv("AGENT_TOKEN", "change-me-pairing-token")

# -----------------------------
# CORS
# -----------------------------
ALLOWED_ORIGINS = _env_list("ALLOWED_ORIGINS", "http://localhost:4200")

# -----------------------------
# Queue
# -----------------------------
JOB_TTL_SECONDS = _env_int("JOB_TTL_SECONDS", 30 * 60)
SWEEP_INTERVAL_SECONDS = _env_int("SWEEP_INTERVAL_SECONDS", 60)
DEFAULT_POLL_LIMIT = _env_int("DEFAULT_POLL_LIMIT", 10)
MAX_POLL_LIMIT = _env_int("MAX_POLL_LIMIT", 100)
CLAIM_ON_DISPATCH = _env_bool("CLAIM_ON_DISPATCH", True)
