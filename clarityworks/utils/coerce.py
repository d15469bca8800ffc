import json
import math
import re
from typing import Any, List, Optional, Sequence

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def ensure_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, (dict, list, bool)):
        return json.dumps(value)
    return str(value)


def ensure_string_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [ensure_string(item) for item in value]
    return [ensure_string(value)]


def coerce_amount(value: Any, default: float = 0.0) -> float:
    """Number or numeric string to a non-negative float, `default` otherwise.

    Strings are read like a lenient float parse: ``"1250.50 USD"`` is 1250.5,
    ``"abc"`` falls back to `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return default
        number = float(match.group(0))
    else:
        return default
    if not math.isfinite(number):
        return default
    return max(number, 0.0)


def pick_choice(value: Any, choices: Sequence[str], default: str) -> str:
    if isinstance(value, str) and value in choices:
        return value
    return default


def non_empty_string(value: Any, default: str) -> str:
    text = ensure_string(value).strip() if value is not None else ""
    return text or default


def optional_string(value: Any) -> Optional[str]:
    text = ensure_string(value).strip()
    return text or None
