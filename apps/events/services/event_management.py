"""
Event management service.

Handles event CRUD operations.
"""

import logging
from datetime import date as date_type
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.events.models import Event, ParticipantRole

from .exceptions import EventNotFoundError
from .participant_management import add_participant


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'date', 'image')


@transaction.atomic
def create_event(
    *,
    name: str,
    date: date_type,
    organizer=None,
    description: str = '',
    image: str = '',
    organizer_name: str = '',
    organizer_contact: str = '',
) -> Event:
    """
    Create a new event.

    When organizer_name is given, the organizer is added as the first
    participant with the organizer role.

    Args:
        name: Event name
        date: Event date
        organizer: Owning user (optional)
        description: Event description (optional)
        image: Image reference (optional)
        organizer_name: Display name of the organizer as a participant
        organizer_contact: Phone of the organizer as a participant

    Returns:
        Created Event instance
    """
    event = Event.objects.create(
        name=name,
        date=date,
        organizer=organizer,
        description=description,
        image=image,
    )

    if organizer_name:
        add_participant(
            event_id=event.id,
            name=organizer_name,
            phone=organizer_contact,
            role=ParticipantRole.ORGANIZER,
        )

    logger.info("Created event %s (%s)", event.id, event.name)
    return event


def get_event_by_id(*, event_id: UUID) -> Event:
    """
    Retrieve an event by ID.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        return Event.objects.get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")


@transaction.atomic
def update_event(*, event_id: UUID, **fields) -> Event:
    """
    Update event details.

    Only name, description, date and image can be changed; other keys
    are ignored.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        event = Event.objects.select_for_update().get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    changed = []
    for field_name in UPDATABLE_FIELDS:
        value: Optional[object] = fields.get(field_name)
        if value is not None:
            setattr(event, field_name, value)
            changed.append(field_name)

    if changed:
        event.save(update_fields=changed + ['updated_at'])
        logger.info("Updated event %s: %s", event.id, ', '.join(changed))

    return event


@transaction.atomic
def delete_event(*, event_id: UUID) -> None:
    """
    Delete an event with all its participants and expenses.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        event = Event.objects.get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    # Shares and expenses first: they PROTECT their participants
    event.expenses.all().delete()
    event.delete()
    logger.info("Deleted event %s", event_id)
