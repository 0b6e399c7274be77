"""Pydantic schemas for request/response."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ----- Member -----
class MemberInfo(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


# ----- Group -----
class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    member_names: list[str] = Field(min_length=1)


class GroupResponse(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    members: list[MemberInfo] = []

    class Config:
        from_attributes = True


# ----- Expense -----
class ExpenseBase(BaseModel):
    title: str
    amount: float = Field(gt=0)
    payer_id: str
    involved_member_ids: list[str] = Field(min_length=1)


class ExpenseCreate(ExpenseBase):
    group_id: str


class ExpenseResponse(ExpenseBase):
    id: str
    group_id: str
    date: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Settlement -----
class Transfer(BaseModel):
    """One settling payment: from_member_id pays to_member_id the amount."""

    from_member_id: str
    to_member_id: str
    amount: float


class BalanceItem(BaseModel):
    member_id: str
    name: str
    balance: float
    settled: bool = True


class SettlementSummary(BaseModel):
    group_id: str
    members: list[MemberInfo] = []
    balances: list[BalanceItem]
    transfers: list[Transfer]
    instructions: list[str] = []
    all_settled: bool
