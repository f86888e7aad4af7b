"""
Domain exceptions for the ledger core.

These exceptions are raised by the split calculator and the balance engine.
They are plain Python exceptions with no HTTP knowledge; views catch them and
turn them into responses.

Exception Hierarchy:
    LedgerError (base)
    ├── InvalidAmountError
    ├── NoParticipantsSelectedError
    ├── InvalidSplitModeError
    ├── SharesMismatchError
    ├── DanglingParticipantReferenceError
    └── IntegrityViolationError

Usage:
    from apps.ledger.exceptions import LedgerError

    try:
        shares = compute_shares(amount, 'custom', involved, custom_shares)
    except LedgerError as e:
        return Response(e.as_dict(), status=400)
"""


class LedgerError(Exception):
    """
    Base exception for all ledger errors.

    Every ledger error is a recoverable validation failure meant to be shown
    to the user, never a crash of the application.
    """

    code = 'ledger_error'

    def as_dict(self):
        """Return a JSON-friendly description of the error."""
        return {'error': str(self), 'code': self.code}


class InvalidAmountError(LedgerError):
    """Raised when an amount is non-numeric, negative or not positive where required."""

    code = 'invalid_amount'


class NoParticipantsSelectedError(LedgerError):
    """Raised when a split is requested with an empty participant set."""

    code = 'no_participants_selected'


class InvalidSplitModeError(LedgerError):
    """Raised when the split mode is not one of equal, custom or selective."""

    code = 'invalid_split_mode'


class SharesMismatchError(LedgerError):
    """
    Raised when custom shares do not add up to the expense amount.

    Carries the expected total, the actual total and the difference
    (expected - actual) so a form can tell the user how far off they are.

    Example:
        raise SharesMismatchError(expected=Decimal('100.00'), actual=Decimal('80.00'))
    """

    code = 'shares_mismatch'

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        self.difference = expected - actual
        super().__init__(
            f"Custom shares total {actual} but the expense amount is {expected} "
            f"(difference {self.difference})"
        )

    def as_dict(self):
        data = super().as_dict()
        data.update({
            'expected': str(self.expected),
            'actual': str(self.actual),
            'difference': str(self.difference),
        })
        return data


class DanglingParticipantReferenceError(LedgerError):
    """
    Raised when an expense references a participant missing from the event.

    Either the payer or one of the share holders is not in the participant
    list handed to the engine.
    """

    code = 'dangling_participant_reference'

    def __init__(self, expense_id, participant_id):
        self.expense_id = expense_id
        self.participant_id = participant_id
        super().__init__(
            f"Expense {expense_id} references participant {participant_id} "
            f"who is not part of the event"
        )

    def as_dict(self):
        data = super().as_dict()
        data.update({
            'expense_id': str(self.expense_id),
            'participant_id': str(self.participant_id),
        })
        return data


class IntegrityViolationError(LedgerError):
    """
    Raised when stored amounts break the zero-sum invariant beyond tolerance.

    With ``expense_id`` set, ``total`` is that expense's amount minus the sum
    of its shares. Without it, ``total`` is the sum of all balances.
    """

    code = 'integrity_violation'

    def __init__(self, total, tolerance, expense_id=None):
        self.total = total
        self.tolerance = tolerance
        self.expense_id = expense_id
        if expense_id is None:
            message = f"Balances sum to {total}, outside the allowed tolerance of {tolerance}"
        else:
            message = (
                f"Shares of expense {expense_id} miss its amount by {total}, "
                f"outside the allowed tolerance of {tolerance}"
            )
        super().__init__(message)

    def as_dict(self):
        data = super().as_dict()
        data.update({
            'total': str(self.total),
            'tolerance': str(self.tolerance),
        })
        if self.expense_id is not None:
            data['expense_id'] = str(self.expense_id)
        return data
