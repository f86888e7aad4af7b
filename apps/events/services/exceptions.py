"""
Domain-specific exceptions for events app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class EventsServiceError(Exception):
    """Base exception for all events service errors."""
    pass


class EventNotFoundError(EventsServiceError):
    """Raised when an event does not exist."""
    pass


class ParticipantNotFoundError(EventsServiceError):
    """Raised when a participant does not exist in the given event."""
    pass


class ParticipantHasExpensesError(EventsServiceError):
    """Raised when removing a participant still referenced by recorded expenses."""

    def __init__(self, message, expense_count=0):
        super().__init__(message)
        self.expense_count = expense_count


class UnknownParticipantError(EventsServiceError):
    """Raised when an expense names a payer or participant outside the event."""
    pass
