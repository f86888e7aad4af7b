"""
Events app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions.
"""

from .exceptions import (
    EventsServiceError,
    EventNotFoundError,
    ParticipantNotFoundError,
    ParticipantHasExpensesError,
    UnknownParticipantError,
)

from .event_management import (
    create_event,
    get_event_by_id,
    update_event,
    delete_event,
)

from .participant_management import (
    normalize_phone,
    add_participant,
    remove_participant,
    get_event_participants,
)

from .expense_management import (
    record_expense,
    get_event_expenses,
)

from .summary import (
    BalanceStatus,
    build_event_snapshot,
    get_event_summary,
)


__all__ = [
    # Exceptions
    'EventsServiceError',
    'EventNotFoundError',
    'ParticipantNotFoundError',
    'ParticipantHasExpensesError',
    'UnknownParticipantError',

    # Event Management
    'create_event',
    'get_event_by_id',
    'update_event',
    'delete_event',

    # Participant Management
    'normalize_phone',
    'add_participant',
    'remove_participant',
    'get_event_participants',

    # Expense Management
    'record_expense',
    'get_event_expenses',

    # Summary
    'BalanceStatus',
    'build_event_snapshot',
    'get_event_summary',
]
