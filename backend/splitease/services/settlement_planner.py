"""Turn net balances into an ordered list of transfers that settles everyone."""
import logging
from collections import deque
from typing import Mapping, Sequence

from splitease.schemas import Transfer
from splitease.services.balance_calculator import EPSILON

logger = logging.getLogger(__name__)


def compute_plan(members: Sequence, balances: Mapping[str, float]) -> list[Transfer]:
    """
    Greedy largest-first matching: the biggest debtor pays the biggest creditor
    until one side is cleared, then the next in line steps up.
    Amounts are left unrounded; formatting is up to the caller.
    """
    debtors = []  # (member_id, amount_owed)
    creditors = []
    for m in members:
        bal = balances.get(m.id, 0.0)
        if bal < -EPSILON:
            debtors.append((m.id, -bal))
        elif bal > EPSILON:
            creditors.append((m.id, bal))
    debtors.sort(key=lambda x: -x[1])
    creditors.sort(key=lambda x: -x[1])

    debtor_queue = deque(debtors)
    creditor_queue = deque(creditors)
    out: list[Transfer] = []
    while debtor_queue and creditor_queue:
        du, debt = debtor_queue[0]
        cu, credit = creditor_queue[0]
        amount = min(debt, credit)
        out.append(Transfer(from_member_id=du, to_member_id=cu, amount=amount))

        if abs(debt - credit) < EPSILON:
            debtor_queue.popleft()
            creditor_queue.popleft()
        elif debt < credit:
            debtor_queue.popleft()
            creditor_queue[0] = (cu, credit - amount)
        else:
            creditor_queue.popleft()
            debtor_queue[0] = (du, debt - amount)

    logger.debug(
        "Planned %d transfers for %d debtors and %d creditors",
        len(out), len(debtors), len(creditors),
    )
    return out


def format_amount(amount: float) -> str:
    return f"${amount:,.2f}"


def describe_transfer(transfer: Transfer, names: Mapping[str, str]) -> str:
    """'Bob pays Alice $10.00'; unknown ids are shown as-is."""
    from_name = names.get(transfer.from_member_id, transfer.from_member_id)
    to_name = names.get(transfer.to_member_id, transfer.to_member_id)
    return f"{from_name} pays {to_name} {format_amount(transfer.amount)}"
