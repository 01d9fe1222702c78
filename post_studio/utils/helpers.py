"""Shared helpers."""
import random
import string
import time
from typing import Any

_BASE36 = string.digits + string.ascii_lowercase


def random_suffix(length: int = 7) -> str:
    """Short lowercase base36 token, used to make ids and channel names unique."""
    return "".join(random.choice(_BASE36) for _ in range(length))


def new_flow_id() -> str:
    """Correlation id for one generation attempt: flow-<epoch ms>-<suffix>."""
    return f"flow-{int(time.time() * 1000)}-{random_suffix()}"


def preview(value: str | None, limit: int = 50) -> str:
    """Truncate text for log lines."""
    if not value:
        return ""
    return value if len(value) <= limit else value[:limit] + "..."


def first_present(data: dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among keys, else None."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None
