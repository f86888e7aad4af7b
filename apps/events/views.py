from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Event
from .serializers import (
    EventSerializer,
    EventListSerializer,
    EventCreateSerializer,
    EventUpdateSerializer,
    ParticipantSerializer,
    ParticipantCreateSerializer,
    ExpenseSerializer,
    ExpenseCreateSerializer,
    EventSummarySerializer,
    SplitPreviewInputSerializer,
    SplitPreviewSerializer,
    ErrorSerializer,
)

from apps.events.services import (
    create_event,
    update_event,
    delete_event,
    add_participant,
    remove_participant,
    get_event_participants,
    record_expense,
    get_event_expenses,
    get_event_summary,
    # Exceptions
    EventNotFoundError,
    ParticipantNotFoundError,
    ParticipantHasExpensesError,
    UnknownParticipantError,
)
from apps.ledger import (
    compute_shares,
    LedgerError,
    DanglingParticipantReferenceError,
    IntegrityViolationError,
)


UUID_PATTERN = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'


def ledger_error_response(error):
    """Map a ledger error to a response: 409 for corrupted data, 400 otherwise."""
    if isinstance(error, (DanglingParticipantReferenceError, IntegrityViolationError)):
        return Response(error.as_dict(), status=status.HTTP_409_CONFLICT)
    return Response(error.as_dict(), status=status.HTTP_400_BAD_REQUEST)


class EventPagination(PageNumberPagination):
    """Custom pagination for events."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class EventViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Event operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get all events
    create: Create a new event
    retrieve: Get an event with participants and expenses
    update: Update event details
    partial_update: Partially update event details
    destroy: Delete an event with everything in it
    """

    queryset = Event.objects.prefetch_related(
        'participants',
        'expenses__shares',
        'expenses__paid_by',
    )
    serializer_class = EventSerializer
    permission_classes = [AllowAny]
    pagination_class = EventPagination
    lookup_value_regex = UUID_PATTERN

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return EventListSerializer
        elif self.action == 'create':
            return EventCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return EventUpdateSerializer
        return EventSerializer

    def create(self, request, *args, **kwargs):
        """Create a new event."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        event = create_event(
            name=data['name'],
            date=data['date'],
            organizer=request.user if request.user.is_authenticated else None,
            description=data.get('description', ''),
            image=data.get('image', ''),
            organizer_name=data.get('organizer_name', ''),
            organizer_contact=data.get('organizer_phone', ''),
        )

        output_serializer = EventSerializer(event, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update event details."""
        serializer = EventUpdateSerializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        try:
            event = update_event(event_id=self.kwargs['pk'], **serializer.validated_data)
        except EventNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        output_serializer = EventSerializer(event, context={'request': request})
        return Response(output_serializer.data)

    def destroy(self, request, *args, **kwargs):
        """Delete an event."""
        try:
            delete_event(event_id=self.kwargs['pk'])
        except EventNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ParticipantCreateSerializer, responses={200: ParticipantSerializer(many=True), 201: ParticipantSerializer})
    @action(detail=True, methods=['get', 'post'])
    def participants(self, request, pk=None):
        """List participants, or add one."""
        if request.method == 'GET':
            try:
                participants = get_event_participants(event_id=pk)
            except EventNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(ParticipantSerializer(participants, many=True).data)

        serializer = ParticipantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            participant = add_participant(event_id=pk, **serializer.validated_data)
        except EventNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None, 404: ErrorSerializer, 409: ErrorSerializer})
    @action(
        detail=True,
        methods=['delete'],
        url_path=rf'participants/(?P<participant_id>{UUID_PATTERN})',
    )
    def delete_participant(self, request, pk=None, participant_id=None):
        """Remove a participant who has no recorded expenses."""
        try:
            remove_participant(event_id=pk, participant_id=participant_id)
        except ParticipantNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ParticipantHasExpensesError as e:
            return Response(
                {'error': str(e), 'expense_count': e.expense_count},
                status=status.HTTP_409_CONFLICT
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ExpenseCreateSerializer, responses={200: ExpenseSerializer(many=True), 201: ExpenseSerializer})
    @action(detail=True, methods=['get', 'post'])
    def expenses(self, request, pk=None):
        """List expenses, or record one."""
        if request.method == 'GET':
            try:
                expenses = get_event_expenses(event_id=pk)
            except EventNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(ExpenseSerializer(expenses, many=True).data)

        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = record_expense(event_id=pk, **serializer.validated_data)
        except EventNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except UnknownParticipantError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except LedgerError as e:
            return ledger_error_response(e)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: EventSummarySerializer, 404: ErrorSerializer, 409: ErrorSerializer})
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """
        Get balances, settlement suggestions and category totals.

        GET /api/events/{id}/summary/
        """
        try:
            summary = get_event_summary(event_id=pk)
        except EventNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except LedgerError as e:
            return ledger_error_response(e)

        return Response(EventSummarySerializer(summary).data)


@extend_schema(
    request=SplitPreviewInputSerializer,
    responses={200: SplitPreviewSerializer, 400: ErrorSerializer},
    description="Preview how an amount would be split, without recording an expense.",
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def split_preview(request):
    """Compute shares for an amount - thin HTTP handler."""
    serializer = SplitPreviewInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        shares = compute_shares(
            data['amount'],
            data['split_mode'],
            data['participants'],
            data.get('custom_shares'),
        )
    except LedgerError as e:
        return ledger_error_response(e)

    return Response(SplitPreviewSerializer({
        'shares': shares,
        'total': sum(shares.values()),
    }).data)
