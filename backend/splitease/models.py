"""SQLAlchemy models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Table, DateTime
from sqlalchemy.orm import relationship

from splitease.database import Base

expense_involved_members = Table(
    "expense_involved_members",
    Base.metadata,
    Column("expense_id", String(36), ForeignKey("expenses.id", ondelete="CASCADE"), primary_key=True),
    Column("member_id", String(36), ForeignKey("members.id", ondelete="CASCADE"), primary_key=True),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Group(Base):
    __tablename__ = "groups"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    members = relationship(
        "Member",
        back_populates="group",
        order_by="Member.position",
        cascade="all, delete-orphan",
    )
    expenses = relationship("Expense", back_populates="group", cascade="all, delete-orphan")


class Member(Base):
    __tablename__ = "members"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=False)
    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    group = relationship("Group", back_populates="members")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("groups.id"), nullable=False)
    payer_id = Column(String(36), ForeignKey("members.id"), nullable=False)
    title = Column(String(512), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    group = relationship("Group", back_populates="expenses")
    payer = relationship("Member", foreign_keys=[payer_id])
    involved_members = relationship("Member", secondary=expense_involved_members)

    @property
    def involved_member_ids(self) -> list[str]:
        return [m.id for m in self.involved_members]
