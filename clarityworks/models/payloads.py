"""
Lenient models for data we do not control: model-provider replies and
advisor-typed JSON. Every field is defaulted or coerced, never rejected, and
the result is converted into the strict records in ``schemas``.
"""
from typing import Any, List, Optional

from pydantic import Field, field_validator

from ..utils.coerce import coerce_amount, non_empty_string, optional_string, pick_choice
from ..utils.ids import new_id, today_iso
from .schemas import ACCOUNT_TYPES, RISK_PROFILES, Account, CamelModel, Client, Goal, Provenance

ACCOUNT_TYPE_SYNONYMS = {
    "ira": "IRA",
    "traditional ira": "IRA",
    "roth": "Roth IRA",
    "roth ira": "Roth IRA",
    "401k": "401k",
    "401(k)": "401k",
    "brokerage": "Brokerage",
    "trust": "Trust",
}


def coerce_account_type(value: Any) -> str:
    if isinstance(value, str):
        if value in ACCOUNT_TYPES:
            return value
        synonym = ACCOUNT_TYPE_SYNONYMS.get(value.strip().lower())
        if synonym:
            return synonym
    return "Brokerage"


def coerce_risk_profile(value: Any) -> str:
    return pick_choice(value, RISK_PROFILES, "Moderate")


def _objects(value: Any) -> List[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class GoalPayload(CamelModel):
    id: Optional[str] = None
    name: str = "Unnamed Goal"
    target_amount: float = 0.0
    current_amount: float = 0.0
    target_date: str = Field(default_factory=today_iso)

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return optional_string(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return non_empty_string(value, "Unnamed Goal")

    @field_validator("target_amount", "current_amount", mode="before")
    @classmethod
    def _amount(cls, value):
        return coerce_amount(value)

    @field_validator("target_date", mode="before")
    @classmethod
    def _date(cls, value):
        return non_empty_string(value, today_iso())

    def to_goal(self, id_prefix: str = "goal") -> Goal:
        return Goal(
            id=self.id or new_id(id_prefix),
            name=self.name,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            target_date=self.target_date,
        )


class AccountPayload(CamelModel):
    id: Optional[str] = None
    name: str = "Unnamed Account"
    type: str = "Brokerage"
    balance: float = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return optional_string(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return non_empty_string(value, "Unnamed Account")

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return coerce_account_type(value)

    @field_validator("balance", mode="before")
    @classmethod
    def _balance(cls, value):
        return coerce_amount(value)

    def to_account(self, id_prefix: str = "acc") -> Account:
        return Account(
            id=self.id or new_id(id_prefix),
            name=self.name,
            type=self.type,
            balance=self.balance,
        )


class ClientPayload(CamelModel):
    id: Optional[str] = None
    name: str = "Unknown Client"
    aum: float = 0.0
    risk_profile: str = "Moderate"
    advisor: str = "Unassigned"
    last_contact: str = Field(default_factory=today_iso)
    goals: List[GoalPayload] = Field(default_factory=list)
    accounts: List[AccountPayload] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value):
        return optional_string(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return non_empty_string(value, "Unknown Client")

    @field_validator("aum", mode="before")
    @classmethod
    def _aum(cls, value):
        return coerce_amount(value)

    @field_validator("risk_profile", mode="before")
    @classmethod
    def _risk_profile(cls, value):
        return coerce_risk_profile(value)

    @field_validator("advisor", mode="before")
    @classmethod
    def _advisor(cls, value):
        return non_empty_string(value, "Unassigned")

    @field_validator("last_contact", mode="before")
    @classmethod
    def _last_contact(cls, value):
        return non_empty_string(value, today_iso())

    @field_validator("goals", "accounts", mode="before")
    @classmethod
    def _records(cls, value):
        return _objects(value)

    def to_client(self) -> Client:
        return Client(
            id=self.id or new_id("client-doc"),
            name=self.name,
            aum=self.aum,
            risk_profile=self.risk_profile,
            advisor=self.advisor,
            last_contact=self.last_contact,
            goals=[g.to_goal(f"goal-doc-{i}") for i, g in enumerate(self.goals)],
            accounts=[a.to_account(f"acc-doc-{i}") for i, a in enumerate(self.accounts)],
            provenance=Provenance.CUSTOM,
        )
