from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid

class ParticipantRole(models.TextChoices):
    ORGANIZER = 'organizer', 'Organizer'
    PARTICIPANT = 'participant', 'Participant'

class SplitMode(models.TextChoices):
    EQUAL = 'equal', 'Equal'
    CUSTOM = 'custom', 'Custom'
    SELECTIVE = 'selective', 'Selective'

class ExpenseCategory(models.TextChoices):
    """Suggested categories. Expense.category accepts any label."""
    FOOD = 'Food', 'Food'
    TRANSPORTATION = 'Transportation', 'Transportation'
    ACCOMMODATION = 'Accommodation', 'Accommodation'
    ENTERTAINMENT = 'Entertainment', 'Entertainment'
    SHOPPING = 'Shopping', 'Shopping'
    OTHER = 'Other', 'Other'

class Event(models.Model):
    """A trip, dinner or outing whose expenses are shared."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    date = models.DateField()
    image = models.CharField(max_length=500, blank=True)

    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='organized_events'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'events'
        indexes = [
            models.Index(fields=['date'], name='events_date_idx'),
            models.Index(fields=['organizer', 'date'], name='events_organizer_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.name} ({self.date})"

class Participant(models.Model):
    """A person attached to an event who pays for or owes expenses."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='participants'
    )

    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(
        max_length=20,
        choices=ParticipantRole.choices,
        default=ParticipantRole.PARTICIPANT
    )
    avatar = models.CharField(max_length=500, blank=True)

    # Payment method (any subset may be filled in)
    wallet_number = models.CharField(max_length=32, blank=True)
    bank_transfer_id = models.CharField(max_length=64, blank=True)
    qr_code = models.CharField(max_length=500, blank=True)

    # Insertion order within the event; drives remainder cents and settlement order
    position = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'participants'
        indexes = [
            models.Index(fields=['event', 'position'], name='participants_event_pos_idx'),
        ]
        ordering = ['position', 'created_at']

    def __str__(self):
        return f"{self.name} ({self.get_role_display()})"

    @property
    def has_payment_method(self):
        return bool(self.wallet_number or self.bank_transfer_id or self.qr_code)

class Expense(models.Model):
    """A bill paid by one participant and shared among some participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name='expenses'
    )

    description = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(max_length=50, default=ExpenseCategory.OTHER)

    # Participants referenced by expenses cannot be deleted
    paid_by = models.ForeignKey(
        Participant,
        on_delete=models.PROTECT,
        related_name='expenses_paid'
    )

    split_mode = models.CharField(
        max_length=20,
        choices=SplitMode.choices,
        default=SplitMode.EQUAL
    )
    # Participant ids (as strings) selected when the expense was entered
    involved = models.JSONField(default=list, blank=True)

    # Opaque reference to a receipt image
    receipt = models.CharField(max_length=500, blank=True)

    date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['event', 'date'], name='expenses_event_date_idx'),
            models.Index(fields=['event', 'category'], name='expenses_event_category_idx'),
        ]
        ordering = ['date', 'created_at']

    def __str__(self):
        return f"{self.description} - {self.amount} ({self.get_split_mode_display()})"

    def get_shares(self):
        """Return the shares mapping: participant id (str) -> amount."""
        return {str(share.participant_id): share.amount for share in self.shares.all()}

class ExpenseShare(models.Model):
    """What one participant owes for one expense."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    expense = models.ForeignKey(
        Expense,
        on_delete=models.CASCADE,
        related_name='shares'
    )
    participant = models.ForeignKey(
        Participant,
        on_delete=models.PROTECT,
        related_name='expense_shares'
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'expense_shares'
        unique_together = [['expense', 'participant']]
        indexes = [
            models.Index(fields=['participant'], name='shares_participant_idx'),
        ]

    def __str__(self):
        return f"{self.participant.name} owes {self.amount}"
