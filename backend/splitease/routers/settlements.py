"""Settlements: balances and who pays whom for a group, and settle (reset) a group."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from splitease.database import get_db
from splitease.models import Group, Expense
from splitease.schemas import SettlementSummary, MemberInfo, BalanceItem, Transfer
from splitease.routers.groups import get_group_or_404
from splitease.services.balance_calculator import UnknownMemberError, compute_balances, is_settled
from splitease.services.settlement_planner import compute_plan, describe_transfer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settlements", tags=["settlements"])


def _summary(group: Group, expenses: list[Expense]) -> SettlementSummary:
    try:
        balances = compute_balances(group.members, expenses)
    except UnknownMemberError as exc:
        logger.error("Group %s has inconsistent expenses: %s", group.id, exc)
        raise HTTPException(status_code=409, detail=str(exc))

    transfers = compute_plan(group.members, balances)
    names = {m.id: m.name for m in group.members}
    return SettlementSummary(
        group_id=group.id,
        members=[MemberInfo(id=m.id, name=m.name) for m in group.members],
        balances=[
            BalanceItem(member_id=mid, name=names[mid], balance=round(bal, 2), settled=is_settled(bal))
            for mid, bal in balances.items()
        ],
        transfers=[
            Transfer(from_member_id=t.from_member_id, to_member_id=t.to_member_id, amount=round(t.amount, 2))
            for t in transfers
        ],
        instructions=[describe_transfer(t, names) for t in transfers],
        all_settled=not transfers,
    )


@router.get("/group/{group_id}", response_model=SettlementSummary)
def get_settlements(group_id: str, db: Session = Depends(get_db)):
    group = get_group_or_404(db, group_id)
    expenses = db.query(Expense).filter(Expense.group_id == group_id).all()
    return _summary(group, expenses)


@router.post("/group/{group_id}/settle", response_model=SettlementSummary)
def settle_group(group_id: str, db: Session = Depends(get_db)):
    """Clear every expense of the group; balances drop back to zero. Not undoable."""
    group = get_group_or_404(db, group_id)
    cleared = len(group.expenses)
    group.expenses.clear()
    db.commit()
    db.refresh(group)
    logger.info("Settled group %s, cleared %d expenses", group_id, cleared)
    return _summary(group, group.expenses)
