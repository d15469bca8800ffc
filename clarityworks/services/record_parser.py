"""
Best-effort parsing of advisor-typed goals and accounts.

Accepts either a JSON array of objects or one record per line with
``|``-separated fields::

    Retirement | 3000000 | 2100000 | 2030-01-01
    My 401k | 401(k) | 50000

Never raises: anything unreadable becomes a default value, and the advisor
reviews the result before it is saved.
"""
import json
import logging
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from ..models.payloads import AccountPayload, GoalPayload, coerce_account_type
from ..models.schemas import Account, Goal
from ..utils.coerce import coerce_amount
from ..utils.ids import new_id, today_iso

logger = logging.getLogger(__name__)

_NOT_NUMERIC = re.compile(r"[^0-9.]")


def parse_amount(text: Optional[str]) -> float:
    """``"$2,450,000"`` -> 2450000.0; anything without digits -> 0."""
    if not text:
        return 0.0
    return coerce_amount(_NOT_NUMERIC.sub("", text))


def parse_action_items(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def _json_array(text: str) -> Optional[List[Any]]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def _fields(line: str) -> List[str]:
    return [part.strip() for part in line.split("|")]


def _field(parts: List[str], index: int) -> str:
    return parts[index] if index < len(parts) else ""


def _lines(text: str) -> List[str]:
    return [line for line in text.splitlines() if line.strip()]


def parse_goals(text: Optional[str]) -> List[Goal]:
    if not text or not text.strip():
        return []

    items = _json_array(text)
    if items is not None:
        goals = []
        for item in items:
            if not isinstance(item, dict):
                logger.debug(f"Skipping non-object goal entry: {item!r}")
                continue
            try:
                goals.append(GoalPayload.model_validate(item).to_goal())
            except ValidationError as e:
                logger.debug(f"Skipping unreadable goal entry: {e}")
        return goals

    goals = []
    for line in _lines(text):
        parts = _fields(line)
        goals.append(Goal(
            id=new_id("goal"),
            name=_field(parts, 0) or "Goal",
            target_amount=parse_amount(_field(parts, 1)),
            current_amount=parse_amount(_field(parts, 2)),
            target_date=_field(parts, 3) or today_iso(),
        ))
    return goals


def parse_accounts(text: Optional[str]) -> List[Account]:
    if not text or not text.strip():
        return []

    items = _json_array(text)
    if items is not None:
        accounts = []
        for item in items:
            if not isinstance(item, dict):
                logger.debug(f"Skipping non-object account entry: {item!r}")
                continue
            try:
                accounts.append(AccountPayload.model_validate(item).to_account())
            except ValidationError as e:
                logger.debug(f"Skipping unreadable account entry: {e}")
        return accounts

    accounts = []
    for line in _lines(text):
        parts = _fields(line)
        accounts.append(Account(
            id=new_id("acc"),
            name=_field(parts, 0) or "Account",
            type=coerce_account_type(_field(parts, 1) or "brokerage"),
            balance=parse_amount(_field(parts, 2)),
        ))
    return accounts
