import pytest

from splitease.models import Member
from splitease.schemas import Transfer
from splitease.services.balance_calculator import EPSILON
from splitease.services.settlement_planner import compute_plan, describe_transfer


def members_for(*ids):
    return [Member(id=i, name=i.upper()) for i in ids]


def apply_plan(balances, plan):
    after = dict(balances)
    for t in plan:
        after[t.from_member_id] += t.amount
        after[t.to_member_id] -= t.amount
    return after


def test_one_creditor_two_debtors():
    members = members_for("alice", "bob", "carol")
    plan = compute_plan(members, {"alice": 20.0, "bob": -10.0, "carol": -10.0})
    assert plan == [
        Transfer(from_member_id="bob", to_member_id="alice", amount=10.0),
        Transfer(from_member_id="carol", to_member_id="alice", amount=10.0),
    ]


def test_two_members():
    plan = compute_plan(members_for("a", "b"), {"a": 25.0, "b": -25.0})
    assert plan == [Transfer(from_member_id="b", to_member_id="a", amount=25.0)]


def test_one_debtor_two_creditors():
    plan = compute_plan(members_for("a", "b", "c"), {"a": 10.0, "b": 10.0, "c": -20.0})
    assert plan == [
        Transfer(from_member_id="c", to_member_id="a", amount=10.0),
        Transfer(from_member_id="c", to_member_id="b", amount=10.0),
    ]


def test_largest_first():
    members = members_for("a", "b", "c", "d")
    plan = compute_plan(members, {"a": 5.0, "b": 45.0, "c": -15.0, "d": -35.0})
    assert [(t.from_member_id, t.to_member_id) for t in plan] == [("d", "b"), ("c", "b"), ("c", "a")]
    assert [t.amount for t in plan] == pytest.approx([35.0, 10.0, 5.0])


def test_plan_settles_everyone():
    members = members_for("a", "b", "c", "d", "e")
    balances = {"a": 33.34, "b": -12.5, "c": 41.16, "d": -60.0, "e": -2.0}
    plan = compute_plan(members, balances)
    assert all(t.amount > 0 for t in plan)
    assert len(plan) <= len(members) - 1
    after = apply_plan(balances, plan)
    assert all(abs(v) < EPSILON for v in after.values())


def test_all_settled_returns_empty():
    members = members_for("a", "b", "c")
    assert compute_plan(members, {"a": 0.0, "b": 0.004, "c": -0.004}) == []


def test_no_creditors_returns_empty():
    assert compute_plan(members_for("a", "b"), {"a": -5.0, "b": 0.0}) == []


def test_rounding_dust_does_not_emit_transfer():
    members = members_for("a", "b", "c")
    balances = {"a": 20.000000001, "b": -10.0, "c": -10.000000001}
    plan = compute_plan(members, balances)
    assert len(plan) == 2
    assert all(t.amount > EPSILON for t in plan)


def test_ignores_balances_of_non_members():
    plan = compute_plan(members_for("a", "b"), {"a": 5.0, "b": -5.0, "ghost": -100.0})
    assert plan == [Transfer(from_member_id="b", to_member_id="a", amount=5.0)]


def test_describe_transfer():
    t = Transfer(from_member_id="b", to_member_id="a", amount=1234.5)
    assert describe_transfer(t, {"a": "Alice", "b": "Bob"}) == "Bob pays Alice $1,234.50"
    assert describe_transfer(t, {"a": "Alice"}) == "b pays Alice $1,234.50"


def test_unbalanced_input_terminates():
    plan = compute_plan(members_for("a", "b", "c"), {"a": 50.0, "b": -10.0, "c": -5.0})
    assert plan == [
        Transfer(from_member_id="b", to_member_id="a", amount=10.0),
        Transfer(from_member_id="c", to_member_id="a", amount=5.0),
    ]
