"""
Events App - Shared Event Expense Tracking

This app stores events, their participants and the expenses they share,
and serves the ledger summary (balances and settlement suggestions)
computed by apps.ledger.

Key Features:
- Event creation with the organizer as first participant
- Participant management with phone normalization and payment methods
- Expense recording with equal, selective and custom splits
- Participants referenced by expenses cannot be removed
- Summary endpoint recomputed from the current data on every request

Architecture:
- Models: Event, Participant, Expense, ExpenseShare
- Services: event, participant, expense and summary management
- Views: EventViewSet plus split preview endpoint
- Exceptions: EventsServiceError hierarchy in services/exceptions.py
"""
