"""Fold a group's expenses into per-member net balances (who is owed, who owes)."""
import logging
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

# Balances closer to zero than this are treated as settled.
EPSILON = 0.01


class InvalidExpenseError(ValueError):
    """Expense cannot be split: no involved members."""


class UnknownMemberError(ValueError):
    """Expense references a member id that is not in the group."""

    def __init__(self, expense_id, member_id):
        self.expense_id = expense_id
        self.member_id = member_id
        super().__init__(f"Expense {expense_id} references unknown member {member_id}")


def is_settled(balance: float) -> bool:
    return abs(balance) < EPSILON


def compute_balances(members: Sequence, expenses: Iterable) -> dict[str, float]:
    """
    members: ordered group members (anything with an ``id``).
    expenses: objects with ``amount``, ``payer_id`` and ``involved_member_ids``.
    Returns member_id -> net balance (positive = is owed money, negative = owes money),
    one entry per member in member order.
    """
    balances: dict[str, float] = {m.id: 0.0 for m in members}
    count = 0
    for e in expenses:
        involved = list(e.involved_member_ids)
        if not involved:
            raise InvalidExpenseError(f"Expense {e.id} has no involved members")
        if e.payer_id not in balances:
            raise UnknownMemberError(e.id, e.payer_id)
        for mid in involved:
            if mid not in balances:
                raise UnknownMemberError(e.id, mid)

        split = e.amount / len(involved)
        balances[e.payer_id] += e.amount
        # The payer's own share is subtracted here too when they are involved.
        for mid in involved:
            balances[mid] -= split
        count += 1

    logger.debug("Computed balances for %d members from %d expenses", len(balances), count)
    return balances
