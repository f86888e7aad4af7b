import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from apps.events.models import Event, ParticipantRole, SplitMode, ExpenseCategory
from apps.events.services import add_participant, record_expense


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def event(db):
    """Create and return an event without participants."""
    return Event.objects.create(
        name='Langkawi Trip',
        description='Long weekend by the beach',
        date=date(2024, 6, 14),
    )


@pytest.fixture
def alice(event):
    """Organizer with a wallet number."""
    return add_participant(
        event_id=event.id,
        name='Alice',
        phone='012-345 6789',
        role=ParticipantRole.ORGANIZER,
        wallet_number='0123456789',
    )


@pytest.fixture
def bob(event, alice):
    """Second participant with a bank transfer id."""
    return add_participant(
        event_id=event.id,
        name='Bob',
        phone='0198887777',
        bank_transfer_id='MBB-5566',
    )


@pytest.fixture
def carol(event, bob):
    """Third participant without a payment method."""
    return add_participant(
        event_id=event.id,
        name='Carol',
        phone='+6581234567',
    )


@pytest.fixture
def participants(alice, bob, carol):
    """All three participants, in insertion order."""
    return [alice, bob, carol]


@pytest.fixture
def dinner(event, participants, alice):
    """Alice pays 90.00 for dinner, split equally among everyone."""
    return record_expense(
        event_id=event.id,
        description='Seafood dinner',
        amount=Decimal('90.00'),
        paid_by=alice.id,
        category=ExpenseCategory.FOOD,
    )


@pytest.fixture
def taxi(event, participants, bob, carol):
    """Bob pays 30.00 for a taxi shared with Carol."""
    return record_expense(
        event_id=event.id,
        description='Taxi to the jetty',
        amount=Decimal('30.00'),
        paid_by=bob.id,
        split_mode=SplitMode.SELECTIVE,
        involved=[bob.id, carol.id],
        category=ExpenseCategory.TRANSPORTATION,
    )
