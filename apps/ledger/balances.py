"""
Balance & Settlement Engine
===========================

Aggregates all expenses of one event into net balances and reduces them to
a list of suggested transfers.

Balance of a participant::

    (sum of amounts they paid) - (sum of shares they owe)

Positive means the participant is owed money, negative means they owe.
Because every expense's amount equals the sum of its shares, balances of an
event sum to zero.

Settlement uses greedy netting: debtors are walked in participant-list
order and each one pays creditors, also in participant-list order, until
their debt is gone. This is not a minimum-transaction solution, but it
always terminates with at most ``debtors + creditors - 1`` transfers.

Example:
    A pays 90 for A, B and C::

        summary = compute_ledger(participants, expenses)
        summary.balances     # {'A': 60.00, 'B': -30.00, 'C': -30.00}
        summary.settlements  # B -> A 30.00, C -> A 30.00

Note:
    Every function here is pure. Callers pass a complete snapshot and get
    the same result for the same snapshot.
"""

import logging

from .exceptions import DanglingParticipantReferenceError, IntegrityViolationError
from .money import CENT, TOLERANCE, ZERO, is_zero, to_money
from .snapshots import LedgerSummary, Settlement


logger = logging.getLogger(__name__)


def compute_balances(participants, expenses):
    """
    Compute every participant's signed balance.

    Args:
        participants (list[ParticipantSnapshot]): The event's participants,
            in display order.
        expenses (list[ExpenseSnapshot]): All expenses of the event.

    Returns:
        dict: participant id -> Decimal balance, in participant-list order.

    Raises:
        DanglingParticipantReferenceError: An expense's payer or share holder
            is not among the participants.
        IntegrityViolationError: An expense's shares miss its amount by more
            than 0.01, or the balances do not sum to zero within 0.01.
    """
    balances = {p.id: ZERO for p in participants}

    for expense in expenses:
        if expense.paid_by not in balances:
            raise DanglingParticipantReferenceError(expense.id, expense.paid_by)
        for participant_id in expense.shares:
            if participant_id not in balances:
                raise DanglingParticipantReferenceError(expense.id, participant_id)

        amount = to_money(expense.amount)
        shares = {pid: to_money(share) for pid, share in expense.shares.items()}

        drift = amount - sum(shares.values(), ZERO)
        if abs(drift) > TOLERANCE:
            logger.error(
                "Shares of expense %s miss its amount %s by %s",
                expense.id, amount, drift,
            )
            raise IntegrityViolationError(total=drift, tolerance=TOLERANCE, expense_id=expense.id)

        balances[expense.paid_by] += amount
        for participant_id, share in shares.items():
            balances[participant_id] -= share

    total = sum(balances.values(), ZERO)
    if abs(total) > TOLERANCE:
        logger.error(
            "Balances sum to %s across %d expenses (tolerance %s)",
            total, len(expenses), TOLERANCE,
        )
        raise IntegrityViolationError(total=total, tolerance=TOLERANCE)

    return balances


def settled_participants(balances):
    """Return ids of participants whose balance is within tolerance of zero."""
    return [pid for pid, balance in balances.items() if is_zero(balance)]


def compute_settlements(balances, payment_methods=None):
    """
    Reduce balances to suggested transfers using greedy netting.

    Args:
        balances (dict): participant id -> Decimal balance. Iteration order
            is the processing order for both debtors and creditors.
        payment_methods (dict, optional): participant id -> PaymentMethod,
            attached to each transfer so the debtor knows how to pay.

    Returns:
        list[Settlement]: Transfers in the order they were produced.
    """
    payment_methods = payment_methods or {}

    # [participant id, remaining amount], both stored as positive amounts
    debtors = [[pid, -b] for pid, b in balances.items() if b < 0 and not is_zero(b)]
    creditors = [[pid, b] for pid, b in balances.items() if b > 0 and not is_zero(b)]

    settlements = []
    for debtor in debtors:
        for creditor in creditors:
            if debtor[1] <= 0:
                break
            if creditor[1] <= 0:
                continue

            payment = min(debtor[1], creditor[1])
            settlements.append(Settlement(
                from_participant=debtor[0],
                to_participant=creditor[0],
                amount=payment,
                payment_method=payment_methods.get(creditor[0]),
            ))
            debtor[1] -= payment
            creditor[1] -= payment

    return settlements


def compute_category_totals(expenses):
    """Sum expense amounts per category label, in first-seen order."""
    totals = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + to_money(expense.amount)
    return totals


def compute_ledger(participants, expenses):
    """
    Compute balances, settlements and category totals for one event.

    Args:
        participants (list[ParticipantSnapshot]): Current participants.
        expenses (list[ExpenseSnapshot]): Current expenses.

    Returns:
        LedgerSummary: The full derived view of the event.

    Raises:
        DanglingParticipantReferenceError: See compute_balances.
        IntegrityViolationError: See compute_balances.
    """
    participants = list(participants)
    expenses = list(expenses)

    balances = compute_balances(participants, expenses)
    payment_methods = {
        p.id: p.payment_method
        for p in participants
        if p.payment_method is not None and not p.payment_method.is_empty
    }
    settlements = compute_settlements(balances, payment_methods)
    category_totals = compute_category_totals(expenses)

    total_expenses = sum(category_totals.values(), ZERO)
    if participants:
        per_person_average = (total_expenses / len(participants)).quantize(CENT)
    else:
        per_person_average = ZERO

    logger.debug(
        "Ledger computed: %d participants, %d expenses, %d settlements",
        len(participants), len(expenses), len(settlements),
    )

    return LedgerSummary(
        balances=balances,
        settlements=tuple(settlements),
        category_totals=category_totals,
        settled=tuple(settled_participants(balances)),
        total_expenses=total_expenses,
        per_person_average=per_person_average,
    )
