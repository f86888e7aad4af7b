from rest_framework import serializers
from .models import Event, Participant, Expense, ParticipantRole, SplitMode, ExpenseCategory


MONEY = dict(max_digits=12, decimal_places=2)


# =============================================================================
# Input Serializers
# =============================================================================

class EventCreateSerializer(serializers.Serializer):
    """
    Validate input for creating an event.

    Fields:
        name (str): Event name
        date (date): Event date
        description (str): Optional description
        image (str): Optional image reference
        organizer_name (str): Optional; adds the organizer as first participant
        organizer_phone (str): Optional organizer phone
    """

    name = serializers.CharField(max_length=200)
    date = serializers.DateField()
    description = serializers.CharField(required=False, allow_blank=True, default='')
    image = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    organizer_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    organizer_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')


class EventUpdateSerializer(serializers.Serializer):
    """Validate input for updating an event; all fields optional."""

    name = serializers.CharField(max_length=200, required=False)
    date = serializers.DateField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ParticipantCreateSerializer(serializers.Serializer):
    """
    Validate input for adding a participant.

    Fields:
        name (str): Display name
        phone (str): Contact number, normalized to international format
        role (str): organizer or participant
        wallet_number, bank_transfer_id, qr_code (str): Optional payment method
    """

    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=ParticipantRole.choices, default=ParticipantRole.PARTICIPANT)
    avatar = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    wallet_number = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')
    bank_transfer_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default='')
    qr_code = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class ExpenseCreateSerializer(serializers.Serializer):
    """
    Validate input for recording an expense.

    Amount positivity and share totals are checked by the split calculator,
    so the API reports the same errors as the service.
    """

    description = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(**MONEY)
    category = serializers.CharField(max_length=50, required=False, default=ExpenseCategory.OTHER)
    paid_by = serializers.UUIDField()
    split_mode = serializers.ChoiceField(choices=SplitMode.choices, default=SplitMode.EQUAL)
    involved = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        help_text="Participants sharing the expense. Defaults to everyone for equal splits."
    )
    custom_shares = serializers.DictField(
        child=serializers.DecimalField(**MONEY),
        required=False,
        help_text="Participant ID -> amount, for custom splits."
    )
    receipt = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    date = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        if attrs['split_mode'] == SplitMode.CUSTOM and not attrs.get('custom_shares'):
            raise serializers.ValidationError({
                'custom_shares': 'Custom splits need an amount per participant'
            })
        return attrs


class SplitPreviewInputSerializer(serializers.Serializer):
    """Validate input for previewing a split without recording it."""

    amount = serializers.DecimalField(**MONEY)
    split_mode = serializers.ChoiceField(choices=SplitMode.choices, default=SplitMode.EQUAL)
    participants = serializers.ListField(child=serializers.CharField(max_length=64), allow_empty=True)
    custom_shares = serializers.DictField(
        child=serializers.DecimalField(**MONEY),
        required=False,
    )


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentMethodSerializer(serializers.Serializer):
    wallet_number = serializers.CharField(allow_blank=True)
    bank_transfer_id = serializers.CharField(allow_blank=True)
    qr_code = serializers.CharField(allow_blank=True)


class ParticipantSerializer(serializers.ModelSerializer):
    """Serializer for participants."""

    payment_method = serializers.SerializerMethodField()

    class Meta:
        model = Participant
        fields = [
            'id',
            'event',
            'name',
            'phone',
            'role',
            'avatar',
            'payment_method',
            'position',
            'created_at',
        ]
        read_only_fields = fields

    def get_payment_method(self, obj):
        if not obj.has_payment_method:
            return None
        return PaymentMethodSerializer({
            'wallet_number': obj.wallet_number,
            'bank_transfer_id': obj.bank_transfer_id,
            'qr_code': obj.qr_code,
        }).data


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for expenses with their shares mapping."""

    paid_by_name = serializers.CharField(source='paid_by.name', read_only=True)
    shares = serializers.SerializerMethodField()

    class Meta:
        model = Expense
        fields = [
            'id',
            'event',
            'description',
            'amount',
            'category',
            'paid_by',
            'paid_by_name',
            'split_mode',
            'shares',
            'involved',
            'receipt',
            'date',
            'created_at',
        ]
        read_only_fields = fields

    def get_shares(self, obj):
        field = serializers.DecimalField(**MONEY)
        return {pid: field.to_representation(amount) for pid, amount in obj.get_shares().items()}


class EventListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    participant_count = serializers.SerializerMethodField()
    expense_count = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            'id',
            'name',
            'date',
            'image',
            'participant_count',
            'expense_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_participant_count(self, obj):
        return obj.participants.count()

    def get_expense_count(self, obj):
        return obj.expenses.count()


class EventSerializer(serializers.ModelSerializer):
    """Main serializer for events."""

    participants = ParticipantSerializer(many=True, read_only=True)
    expenses = ExpenseSerializer(many=True, read_only=True)

    class Meta:
        model = Event
        fields = [
            'id',
            'name',
            'description',
            'date',
            'image',
            'organizer',
            'participants',
            'expenses',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ParticipantBalanceSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    role = serializers.CharField()
    balance = serializers.DecimalField(**MONEY)
    status = serializers.CharField()


class SettlementSerializer(serializers.Serializer):
    from_participant = serializers.CharField()
    from_name = serializers.CharField()
    to_participant = serializers.CharField()
    to_name = serializers.CharField()
    amount = serializers.DecimalField(**MONEY)
    payment_method = PaymentMethodSerializer(allow_null=True)


class EventSummarySerializer(serializers.Serializer):
    """Serializer for the event ledger summary."""

    event = EventListSerializer()
    balances = serializers.DictField(child=serializers.DecimalField(**MONEY))
    participants = ParticipantBalanceSerializer(many=True)
    settlements = SettlementSerializer(many=True)
    category_totals = serializers.DictField(child=serializers.DecimalField(**MONEY))
    settled = serializers.ListField(child=serializers.CharField())
    total_expenses = serializers.DecimalField(**MONEY)
    per_person_average = serializers.DecimalField(**MONEY)
    expense_count = serializers.IntegerField()


class SplitPreviewSerializer(serializers.Serializer):
    shares = serializers.DictField(child=serializers.DecimalField(**MONEY))
    total = serializers.DecimalField(**MONEY)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField(required=False)
