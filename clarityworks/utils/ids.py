import time
import uuid
from datetime import date, datetime, timezone


def new_id(prefix: str) -> str:
    """`<prefix>-<epoch ms>-<9 char random suffix>`, e.g. ``interaction-1732838400000-3f9a1c2b7``."""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return utc_now().date()


def today_iso() -> str:
    return today().isoformat()
