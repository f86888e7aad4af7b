"""
Service layer unit tests for events app.

Tests cover:
- Phone normalization
- Participant ordering and removal refusal
- Expense recording through the split calculator
- Summary recomputation after every mutation
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from apps.events.models import Event, Expense, ExpenseShare, Participant, ParticipantRole, SplitMode
from apps.events.services import (
    BalanceStatus,
    create_event,
    get_event_by_id,
    update_event,
    delete_event,
    normalize_phone,
    add_participant,
    remove_participant,
    get_event_participants,
    record_expense,
    get_event_expenses,
    build_event_snapshot,
    get_event_summary,
)
from apps.events.services.exceptions import (
    EventNotFoundError,
    ParticipantNotFoundError,
    ParticipantHasExpensesError,
    UnknownParticipantError,
)
from apps.ledger.exceptions import (
    InvalidAmountError,
    NoParticipantsSelectedError,
    SharesMismatchError,
)


# =============================================================================
# Phone Normalization Tests
# =============================================================================

class TestNormalizePhone:
    """Tests for normalize_phone."""

    def test_leading_zero_replaced_by_country_code(self):
        assert normalize_phone('012-345 6789', country_code='60') == '+60123456789'

    def test_bare_country_code_gets_plus(self):
        assert normalize_phone('60123456789', country_code='60') == '+60123456789'

    def test_international_number_unchanged(self):
        assert normalize_phone('+44 20 7946 0958', country_code='60') == '+442079460958'

    def test_local_number_without_prefix(self):
        assert normalize_phone('123456789', country_code='60') == '+60123456789'

    def test_empty_stays_empty(self):
        assert normalize_phone('', country_code='60') == ''

    def test_default_country_code_from_settings(self, settings):
        settings.DEFAULT_PHONE_COUNTRY_CODE = '65'
        assert normalize_phone('081234567') == '+6581234567'


# =============================================================================
# Event Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestEventManagement:
    """Tests for event_management.py service functions."""

    def test_create_event_with_organizer_participant(self):
        """Organizer name adds the organizer as first participant."""
        event = create_event(
            name='Team Dinner',
            date=date(2024, 5, 1),
            organizer_name='Dana',
            organizer_contact='0111111111',
        )

        participants = list(event.participants.all())
        assert len(participants) == 1
        assert participants[0].name == 'Dana'
        assert participants[0].role == ParticipantRole.ORGANIZER
        assert participants[0].phone == '+60111111111'

    def test_create_event_without_organizer(self):
        event = create_event(name='Picnic', date=date(2024, 5, 2))

        assert event.participants.count() == 0

    def test_get_event_by_id_not_found(self):
        with pytest.raises(EventNotFoundError):
            get_event_by_id(event_id=uuid4())

    def test_update_event_only_given_fields(self, event):
        updated = update_event(event_id=event.id, name='Penang Trip', description=None)

        assert updated.name == 'Penang Trip'
        assert updated.description == 'Long weekend by the beach'

    def test_update_event_not_found(self):
        with pytest.raises(EventNotFoundError):
            update_event(event_id=uuid4(), name='Nothing')

    def test_delete_event_removes_everything(self, event, dinner):
        delete_event(event_id=event.id)

        assert not Event.objects.filter(id=event.id).exists()
        assert not Participant.objects.filter(event_id=event.id).exists()
        assert not Expense.objects.filter(event_id=event.id).exists()
        assert not ExpenseShare.objects.exists()


# =============================================================================
# Participant Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestParticipantManagement:
    """Tests for participant_management.py service functions."""

    def test_participants_keep_insertion_order(self, event, participants):
        ordered = list(get_event_participants(event_id=event.id))

        assert [p.name for p in ordered] == ['Alice', 'Bob', 'Carol']
        assert [p.position for p in ordered] == [0, 1, 2]

    def test_add_participant_normalizes_phone(self, alice):
        assert alice.phone == '+60123456789'

    def test_add_participant_event_not_found(self, db):
        with pytest.raises(EventNotFoundError):
            add_participant(event_id=uuid4(), name='Ghost')

    def test_remove_participant_without_expenses(self, event, participants, carol):
        remove_participant(event_id=event.id, participant_id=carol.id)

        assert not Participant.objects.filter(id=carol.id).exists()

    def test_remove_payer_refused(self, event, dinner, alice):
        """A participant who paid for an expense cannot be removed."""
        with pytest.raises(ParticipantHasExpensesError) as exc_info:
            remove_participant(event_id=event.id, participant_id=alice.id)

        assert exc_info.value.expense_count == 1
        assert Participant.objects.filter(id=alice.id).exists()

    def test_remove_sharer_refused(self, event, dinner, taxi, carol):
        """A participant who only shares in expenses cannot be removed either."""
        with pytest.raises(ParticipantHasExpensesError) as exc_info:
            remove_participant(event_id=event.id, participant_id=carol.id)

        assert exc_info.value.expense_count == 2

    def test_remove_participant_from_other_event(self, carol):
        other = Event.objects.create(name='Other', date=date(2024, 1, 1))

        with pytest.raises(ParticipantNotFoundError):
            remove_participant(event_id=other.id, participant_id=carol.id)

    def test_get_event_participants_not_found(self, db):
        with pytest.raises(EventNotFoundError):
            get_event_participants(event_id=uuid4())


# =============================================================================
# Expense Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestExpenseManagement:
    """Tests for expense_management.py service functions."""

    def test_equal_split_defaults_to_everyone(self, dinner, participants):
        shares = dinner.get_shares()

        assert shares == {str(p.id): Decimal('30.00') for p in participants}
        assert dinner.involved == [str(p.id) for p in participants]
        assert dinner.amount == Decimal('90.00')

    def test_equal_split_remainder_goes_to_first_participants(self, event, participants, alice):
        expense = record_expense(
            event_id=event.id,
            description='Snacks',
            amount='100.00',
            paid_by=alice.id,
        )

        shares = expense.get_shares()
        assert [shares[str(p.id)] for p in participants] == [
            Decimal('33.34'), Decimal('33.33'), Decimal('33.33'),
        ]

    def test_selective_split(self, taxi, bob, carol):
        assert taxi.get_shares() == {
            str(bob.id): Decimal('15.00'),
            str(carol.id): Decimal('15.00'),
        }
        assert taxi.split_mode == SplitMode.SELECTIVE

    def test_custom_split(self, event, participants, alice, bob, carol):
        expense = record_expense(
            event_id=event.id,
            description='Villa',
            amount=Decimal('300.00'),
            paid_by=alice.id,
            split_mode=SplitMode.CUSTOM,
            custom_shares={
                alice.id: Decimal('150.00'),
                bob.id: Decimal('100.00'),
                carol.id: Decimal('50.00'),
            },
        )

        assert expense.get_shares() == {
            str(alice.id): Decimal('150.00'),
            str(bob.id): Decimal('100.00'),
            str(carol.id): Decimal('50.00'),
        }

    def test_custom_split_mismatch_records_nothing(self, event, participants, alice, bob):
        with pytest.raises(SharesMismatchError) as exc_info:
            record_expense(
                event_id=event.id,
                description='Villa',
                amount=Decimal('100.00'),
                paid_by=alice.id,
                split_mode=SplitMode.CUSTOM,
                custom_shares={alice.id: Decimal('50.00'), bob.id: Decimal('30.00')},
            )

        assert exc_info.value.difference == Decimal('20.00')
        assert not Expense.objects.filter(event=event).exists()

    def test_custom_share_for_outsider_rejected(self, event, participants, alice):
        """A share for someone outside the event is reported, not dropped."""
        outsider_id = uuid4()

        with pytest.raises(UnknownParticipantError) as exc_info:
            record_expense(
                event_id=event.id,
                description='Villa',
                amount=Decimal('100.00'),
                paid_by=alice.id,
                split_mode=SplitMode.CUSTOM,
                custom_shares={alice.id: Decimal('99.99'), outsider_id: Decimal('0.01')},
            )

        assert str(outsider_id) in str(exc_info.value)
        assert not Expense.objects.filter(event=event).exists()

    def test_zero_amount_rejected(self, event, participants, alice):
        with pytest.raises(InvalidAmountError):
            record_expense(
                event_id=event.id,
                description='Free water',
                amount=Decimal('0'),
                paid_by=alice.id,
            )

    def test_selective_without_participants_rejected(self, event, participants, alice):
        with pytest.raises(NoParticipantsSelectedError):
            record_expense(
                event_id=event.id,
                description='Nobody',
                amount=Decimal('10.00'),
                paid_by=alice.id,
                split_mode=SplitMode.SELECTIVE,
                involved=[],
            )

    def test_unknown_payer_rejected(self, event, participants):
        with pytest.raises(UnknownParticipantError):
            record_expense(
                event_id=event.id,
                description='Mystery',
                amount=Decimal('10.00'),
                paid_by=uuid4(),
            )

    def test_participant_from_other_event_rejected(self, event, participants, alice):
        other = Event.objects.create(name='Other', date=date(2024, 1, 1))
        stranger = add_participant(event_id=other.id, name='Stranger')

        with pytest.raises(UnknownParticipantError):
            record_expense(
                event_id=event.id,
                description='Drinks',
                amount=Decimal('20.00'),
                paid_by=alice.id,
                split_mode=SplitMode.SELECTIVE,
                involved=[alice.id, stranger.id],
            )

    def test_record_expense_event_not_found(self, db):
        with pytest.raises(EventNotFoundError):
            record_expense(
                event_id=uuid4(),
                description='Lost',
                amount=Decimal('10.00'),
                paid_by=uuid4(),
            )

    def test_get_event_expenses_in_date_order(self, event, dinner, taxi):
        expenses = list(get_event_expenses(event_id=event.id))

        assert [e.id for e in expenses] == [dinner.id, taxi.id]


# =============================================================================
# Summary Service Tests
# =============================================================================

@pytest.mark.django_db
class TestEventSummary:
    """Tests for summary.py service functions."""

    def test_build_event_snapshot(self, event, dinner, participants):
        _, participant_snapshots, expense_snapshots = build_event_snapshot(event_id=event.id)

        assert [p.id for p in participant_snapshots] == [str(p.id) for p in participants]
        assert expense_snapshots[0].amount == Decimal('90.00')
        assert expense_snapshots[0].category == 'Food'

    def test_summary_balances_and_settlements(self, event, dinner, taxi, alice, bob, carol):
        summary = get_event_summary(event_id=event.id)

        assert summary['balances'] == {
            str(alice.id): Decimal('60.00'),
            str(bob.id): Decimal('-15.00'),
            str(carol.id): Decimal('-45.00'),
        }
        assert [
            (s['from_name'], s['to_name'], s['amount']) for s in summary['settlements']
        ] == [
            ('Bob', 'Alice', Decimal('15.00')),
            ('Carol', 'Alice', Decimal('45.00')),
        ]
        assert summary['settlements'][0]['payment_method']['wallet_number'] == '0123456789'
        assert summary['category_totals'] == {
            'Food': Decimal('90.00'),
            'Transportation': Decimal('30.00'),
        }
        assert summary['total_expenses'] == Decimal('120.00')
        assert summary['per_person_average'] == Decimal('40.00')
        assert summary['expense_count'] == 2

    def test_summary_statuses(self, event, dinner, taxi, alice, bob, carol):
        summary = get_event_summary(event_id=event.id)
        statuses = {row['name']: row['status'] for row in summary['participants']}

        assert statuses == {
            'Alice': BalanceStatus.OWED,
            'Bob': BalanceStatus.OWES,
            'Carol': BalanceStatus.OWES,
        }

    def test_summary_reflects_new_expense(self, event, dinner, alice, bob, carol):
        """Carol pays back Alice with a custom expense; both end up settled."""
        record_expense(
            event_id=event.id,
            description='Carol pays Alice back',
            amount=Decimal('30.00'),
            paid_by=carol.id,
            split_mode=SplitMode.CUSTOM,
            custom_shares={alice.id: Decimal('30.00')},
        )

        summary = get_event_summary(event_id=event.id)

        assert summary['balances'][str(carol.id)] == Decimal('0.00')
        assert str(carol.id) in summary['settled']
        assert [s['from_name'] for s in summary['settlements']] == ['Bob']

    def test_summary_empty_event(self, event):
        summary = get_event_summary(event_id=event.id)

        assert summary['balances'] == {}
        assert summary['settlements'] == []
        assert summary['total_expenses'] == Decimal('0.00')
        assert summary['per_person_average'] == Decimal('0.00')

    def test_summary_event_not_found(self, db):
        with pytest.raises(EventNotFoundError):
            get_event_summary(event_id=uuid4())
