import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# -----------------------------
# Status / payload types
# -----------------------------
PENDING = "pending"
PROCESSING = "processing"
DONE = "done"
ERROR = "error"

JOB_TYPES = ("text", "base64", "hex")

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off", ""}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_int(value: Any, default: int) -> int:
    """Lenient integer parsing: leading digits win, anything else is the default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        m = _INT_PREFIX.match(value)
        if m:
            return int(m.group(1))
    return default


def parse_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default


class Job(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    agent_id: Optional[str] = None
    printer_name: str
    type: str = "text"
    payload: str

    # formatting, passed through to the agent
    encoding: str = "utf8"
    cut_type: str = "full"
    feed_lines: int = 3
    page_width: int = 80
    page_height: int = 297
    margin_left: int = 0
    margin_top: int = 0
    font_size: int = 12
    font_name: str = "Courier New"
    bold: bool = False
    align: str = "left"
    character_set: str = "UTF-8"

    # thermal
    density: int = 8
    speed: int = 3
    invert: bool = False

    # graphics
    barcode: Any = None
    qr_code: Any = None

    # lifecycle
    status: str = PENDING
    result: Any = None
    error_detail: Any = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    client_info: str = "unknown"

    @field_validator(
        "feed_lines", "page_width", "page_height", "margin_left", "margin_top",
        "font_size", "density", "speed",
        mode="before",
    )
    @classmethod
    def _lenient_int(cls, value: Any, info: ValidationInfo) -> int:
        return parse_int(value, cls.model_fields[info.field_name].default)

    @field_validator("bold", "invert", mode="before")
    @classmethod
    def _lenient_bool(cls, value: Any, info: ValidationInfo) -> bool:
        return parse_bool(value, cls.model_fields[info.field_name].default)

    @field_validator(
        "encoding", "cut_type", "font_name", "align", "character_set", "client_info",
        mode="before",
    )
    @classmethod
    def _lenient_str(cls, value: Any, info: ValidationInfo) -> str:
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value if isinstance(value, str) else str(value)

    @field_validator("printer_name", "payload", mode="before")
    @classmethod
    def _as_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("agent_id", mode="before")
    @classmethod
    def _blank_agent_is_unscoped(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> str:
        if value is None or value == "":
            return "text"
        t = str(value).strip().lower()
        if t not in JOB_TYPES:
            logger.warning("Unknown job type %r, falling back to 'text'", value)
            return "text"
        return t

    @classmethod
    def from_submission(cls, data: Dict[str, Any], client_info: Optional[str] = None) -> "Job":
        """Build a pending job from a client request body, ignoring unknown
        and server-owned fields."""
        fields = {k: v for k, v in data.items() if k in SUBMISSION_FIELDS}
        if client_info:
            fields["clientInfo"] = client_info
        return cls.model_validate(fields)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# fields a submitting client may set (JSON names)
_SERVER_FIELDS = {"id", "status", "result", "error_detail", "created_at", "updated_at", "client_info"}
SUBMISSION_FIELDS = frozenset(
    to_camel(name) for name in Job.model_fields if name not in _SERVER_FIELDS
)
