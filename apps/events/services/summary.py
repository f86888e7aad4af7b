"""
Event summary service.

Reads an event from the database, turns it into ledger snapshots and runs
the balance and settlement engine. Nothing is cached: every call reads the
current participants and expenses, so the summary reflects the latest
mutation.
"""

import logging
from typing import Any, Dict, List, Tuple
from uuid import UUID

from apps.events.models import Event, Expense, Participant
from apps.ledger import (
    ExpenseSnapshot,
    ParticipantSnapshot,
    PaymentMethod,
    compute_ledger,
)

from .exceptions import EventNotFoundError


logger = logging.getLogger(__name__)


class BalanceStatus:
    """Balance status constants."""
    OWED = 'owed'
    OWES = 'owes'
    SETTLED = 'settled'


def participant_snapshot(participant: Participant) -> ParticipantSnapshot:
    return ParticipantSnapshot(
        id=str(participant.id),
        name=participant.name,
        contact=participant.phone,
        role=participant.role,
        payment_method=PaymentMethod(
            wallet_number=participant.wallet_number,
            bank_transfer_id=participant.bank_transfer_id,
            qr_code=participant.qr_code,
        ),
    )


def expense_snapshot(expense: Expense) -> ExpenseSnapshot:
    return ExpenseSnapshot(
        id=str(expense.id),
        amount=expense.amount,
        paid_by=str(expense.paid_by_id),
        shares=expense.get_shares(),
        category=expense.category,
        description=expense.description,
        split_mode=expense.split_mode,
        involved=tuple(expense.involved or ()),
    )


def build_event_snapshot(*, event_id: UUID) -> Tuple[Event, List[ParticipantSnapshot], List[ExpenseSnapshot]]:
    """
    Read one consistent view of an event for the ledger.

    Returns:
        tuple: (Event, participant snapshots in order, expense snapshots)

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        event = Event.objects.get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    participants = [
        participant_snapshot(p)
        for p in event.participants.order_by('position', 'created_at')
    ]
    expenses = [
        expense_snapshot(e)
        for e in event.expenses.prefetch_related('shares').order_by('date', 'created_at')
    ]
    return event, participants, expenses


def _payment_method_dict(payment_method):
    if payment_method is None:
        return None
    return {
        'wallet_number': payment_method.wallet_number,
        'bank_transfer_id': payment_method.bank_transfer_id,
        'qr_code': payment_method.qr_code,
    }


def get_event_summary(*, event_id: UUID) -> Dict[str, Any]:
    """
    Compute the balances, settlements and category totals of an event.

    Returns:
        dict: A dictionary containing:
            - event (Event): The event.
            - balances (dict): participant id -> signed balance.
            - participants (list[dict]): id, name, role, balance and status
              (owed / owes / settled) per participant, in order.
            - settlements (list[dict]): from/to ids and names, amount and the
              recipient's payment method.
            - category_totals (dict): category -> total amount.
            - settled (list[str]): ids of settled participants.
            - total_expenses (Decimal): Sum of all expense amounts.
            - per_person_average (Decimal): Total divided by participant count.
            - expense_count (int): Number of expenses.

    Raises:
        EventNotFoundError: If event doesn't exist
        DanglingParticipantReferenceError: If an expense points at a
            participant that is not in the event
        IntegrityViolationError: If stored shares don't add up
    """
    event, participants, expenses = build_event_snapshot(event_id=event_id)
    ledger = compute_ledger(participants, expenses)

    names = {p.id: p.name for p in participants}
    settled = set(ledger.settled)

    participant_rows = []
    for p in participants:
        balance = ledger.balances[p.id]
        if p.id in settled:
            status = BalanceStatus.SETTLED
        elif balance > 0:
            status = BalanceStatus.OWED
        else:
            status = BalanceStatus.OWES
        participant_rows.append({
            'id': p.id,
            'name': p.name,
            'role': p.role,
            'balance': balance,
            'status': status,
        })

    settlements = [
        {
            'from_participant': s.from_participant,
            'from_name': names[s.from_participant],
            'to_participant': s.to_participant,
            'to_name': names[s.to_participant],
            'amount': s.amount,
            'payment_method': _payment_method_dict(s.payment_method),
        }
        for s in ledger.settlements
    ]

    logger.debug("Summary for event %s: %d settlements", event.id, len(settlements))

    return {
        'event': event,
        'balances': ledger.balances,
        'participants': participant_rows,
        'settlements': settlements,
        'category_totals': ledger.category_totals,
        'settled': list(ledger.settled),
        'total_expenses': ledger.total_expenses,
        'per_person_average': ledger.per_person_average,
        'expense_count': len(expenses),
    }
