"""Expenses: add, list, get, delete."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from splitease.database import get_db
from splitease.models import Expense
from splitease.schemas import ExpenseCreate, ExpenseResponse
from splitease.routers.groups import get_group_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _expense_response(exp: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=exp.id,
        group_id=exp.group_id,
        title=exp.title,
        amount=exp.amount,
        payer_id=exp.payer_id,
        involved_member_ids=exp.involved_member_ids,
        date=exp.date,
    )


def _get_expense_or_404(db: Session, expense_id: str) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("", response_model=ExpenseResponse)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    group = get_group_or_404(db, data.group_id)
    title = data.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")
    if not any(m.id == data.payer_id for m in group.members):
        raise HTTPException(status_code=400, detail="Payer must be a group member")
    involved_ids = list(dict.fromkeys(data.involved_member_ids))
    if not involved_ids:
        raise HTTPException(status_code=400, detail="At least one involved member required")
    involved = [m for m in group.members if m.id in involved_ids]
    if len(involved) != len(involved_ids):
        raise HTTPException(status_code=400, detail="All involved members must be group members")

    expense = Expense(
        group_id=group.id,
        title=title,
        amount=data.amount,
        payer_id=data.payer_id,
    )
    expense.involved_members = involved
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info("Added expense %s (%.2f) to group %s", expense.id, expense.amount, group.id)
    return _expense_response(expense)


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    group_id: str,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    get_group_or_404(db, group_id)
    expenses = (
        db.query(Expense)
        .filter(Expense.group_id == group_id)
        .order_by(Expense.date.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [_expense_response(e) for e in expenses]


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: str, db: Session = Depends(get_db)):
    return _expense_response(_get_expense_or_404(db, expense_id))


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: str, db: Session = Depends(get_db)):
    expense = _get_expense_or_404(db, expense_id)
    db.delete(expense)
    db.commit()
    logger.info("Deleted expense %s", expense_id)
