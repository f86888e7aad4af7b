"""
Participant management service.

Handles adding and removing event participants. A participant who paid for
or shares in a recorded expense cannot be removed, so balances never point
at someone who is gone.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Max, Q, QuerySet

from apps.events.models import Event, Expense, Participant, ParticipantRole

from .exceptions import (
    EventNotFoundError,
    ParticipantHasExpensesError,
    ParticipantNotFoundError,
)


logger = logging.getLogger(__name__)


def normalize_phone(phone: str, country_code: str = None) -> str:
    """
    Normalize a phone number to international format.

    Spaces and dashes are stripped. A leading 0 is replaced by the country
    code, a bare country code gets a '+', anything else without a '+' is
    assumed to be a local number.

    Example:
        >>> normalize_phone('012-345 6789', country_code='60')
        '+60123456789'
    """
    if country_code is None:
        country_code = settings.DEFAULT_PHONE_COUNTRY_CODE

    normalized = phone.replace(' ', '').replace('-', '')
    if not normalized:
        return normalized

    if normalized.startswith('0'):
        return f'+{country_code}{normalized[1:]}'
    if normalized.startswith(country_code):
        return f'+{normalized}'
    if not normalized.startswith('+'):
        return f'+{country_code}{normalized}'
    return normalized


@transaction.atomic
def add_participant(
    *,
    event_id: UUID,
    name: str,
    phone: str = '',
    role: str = ParticipantRole.PARTICIPANT,
    avatar: str = '',
    wallet_number: str = '',
    bank_transfer_id: str = '',
    qr_code: str = '',
) -> Participant:
    """
    Add a participant to an event.

    Participants are appended at the end of the event's participant order.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        event = Event.objects.select_for_update().get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    last_position = event.participants.aggregate(last=Max('position'))['last']
    position = 0 if last_position is None else last_position + 1

    participant = Participant.objects.create(
        event=event,
        name=name,
        phone=normalize_phone(phone),
        role=role,
        avatar=avatar,
        wallet_number=wallet_number,
        bank_transfer_id=bank_transfer_id,
        qr_code=qr_code,
        position=position,
    )

    logger.info("Added participant %s to event %s", participant.id, event.id)
    return participant


@transaction.atomic
def remove_participant(*, event_id: UUID, participant_id: UUID) -> None:
    """
    Remove a participant from an event.

    Args:
        event_id: UUID of the event
        participant_id: UUID of the participant to remove

    Raises:
        ParticipantNotFoundError: If participant isn't in the event
        ParticipantHasExpensesError: If the participant paid for or shares
            in any recorded expense
    """
    try:
        participant = (
            Participant.objects
            .select_for_update()
            .get(id=participant_id, event_id=event_id)
        )
    except Participant.DoesNotExist:
        raise ParticipantNotFoundError(
            f"Participant {participant_id} not found in event {event_id}"
        )

    expense_count = (
        Expense.objects
        .filter(Q(paid_by=participant) | Q(shares__participant=participant))
        .distinct()
        .count()
    )
    if expense_count:
        logger.warning(
            "Refused to remove participant %s: referenced by %d expenses",
            participant.id, expense_count,
        )
        raise ParticipantHasExpensesError(
            f"{participant.name} is part of {expense_count} recorded expense(s) "
            f"and cannot be removed",
            expense_count=expense_count,
        )

    participant.delete()
    logger.info("Removed participant %s from event %s", participant_id, event_id)


def get_event_participants(*, event_id: UUID) -> QuerySet:
    """
    Get all participants of an event in insertion order.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    if not Event.objects.filter(id=event_id).exists():
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    return Participant.objects.filter(event_id=event_id).order_by('position', 'created_at')

