"""
Expense management service.

Records expenses and their shares. Shares are computed once, when the
expense is entered, by the ledger split calculator and stored alongside
the expense; expenses are not edited afterwards.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.events.models import Event, Expense, ExpenseCategory, ExpenseShare, SplitMode
from apps.ledger import compute_shares
from apps.ledger.money import to_money

from .exceptions import EventNotFoundError, UnknownParticipantError


logger = logging.getLogger(__name__)


@transaction.atomic
def record_expense(
    *,
    event_id: UUID,
    description: str,
    amount: Decimal,
    paid_by: UUID,
    split_mode: str = SplitMode.EQUAL,
    category: str = ExpenseCategory.OTHER,
    involved: Optional[List[UUID]] = None,
    custom_shares: Optional[Dict[UUID, Decimal]] = None,
    receipt: str = '',
    date: Optional[datetime] = None,
) -> Expense:
    """
    Record an expense and its shares.

    For an equal split without an explicit involved list, every participant
    of the event is involved, in participant order. Selective and custom
    splits use the involved list as given (for custom, an empty list means
    every participant named in custom_shares).

    Args:
        event_id: UUID of the event
        description: What the money was spent on
        amount: Total paid
        paid_by: UUID of the paying participant
        split_mode: 'equal', 'selective' or 'custom'
        category: Category label (free-form)
        involved: Participant UUIDs sharing the expense
        custom_shares: Participant UUID -> amount, for custom splits
        receipt: Opaque receipt reference
        date: When the expense happened (defaults to now)

    Returns:
        Created Expense with its shares

    Raises:
        EventNotFoundError: If event doesn't exist
        UnknownParticipantError: If payer or an involved participant is not
            part of the event, or custom_shares names someone outside it
        LedgerError: Any split calculator error (invalid amount, no
            participants, shares mismatch)
    """
    try:
        event = Event.objects.get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    participants = {str(p.id): p for p in event.participants.order_by('position', 'created_at')}

    payer_id = str(paid_by)
    if payer_id not in participants:
        raise UnknownParticipantError(f"Payer {payer_id} is not part of this event")

    custom = {str(pid): value for pid, value in (custom_shares or {}).items()}

    strangers = [pid for pid in custom if pid not in participants]
    if strangers:
        raise UnknownParticipantError(
            f"Custom shares name participants not part of this event: {', '.join(strangers)}"
        )

    if involved:
        involved_ids = [str(pid) for pid in involved]
    elif split_mode == SplitMode.EQUAL:
        involved_ids = list(participants)
    elif split_mode == SplitMode.CUSTOM:
        involved_ids = [pid for pid in participants if pid in custom]
    else:
        involved_ids = []

    unknown = [pid for pid in involved_ids if pid not in participants]
    if unknown:
        raise UnknownParticipantError(
            f"Participants not part of this event: {', '.join(unknown)}"
        )

    shares = compute_shares(amount, split_mode, involved_ids, custom)

    expense = Expense.objects.create(
        event=event,
        description=description,
        amount=to_money(amount),
        category=category or ExpenseCategory.OTHER,
        paid_by=participants[payer_id],
        split_mode=split_mode,
        involved=list(shares),
        receipt=receipt,
        date=date or timezone.now(),
    )
    ExpenseShare.objects.bulk_create([
        ExpenseShare(expense=expense, participant=participants[pid], amount=share)
        for pid, share in shares.items()
    ])

    logger.info(
        "Recorded expense %s in event %s: %s paid by %s, %s split among %d",
        expense.id, event.id, expense.amount, payer_id, split_mode, len(shares),
    )
    return expense


def get_event_expenses(*, event_id: UUID) -> QuerySet:
    """
    Get all expenses of an event with payer and shares loaded.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    if not Event.objects.filter(id=event_id).exists():
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    return (
        Expense.objects
        .filter(event_id=event_id)
        .select_related('paid_by')
        .prefetch_related('shares')
        .order_by('date', 'created_at')
    )
