"""
Ledger - Split Calculator and Balance & Settlement Engine

Pure, Django-free computations over a snapshot of one event's participants
and expenses. The events app reads the database, builds snapshots and calls
into this package; nothing here performs I/O.

Key Features:
- Cent-exact equal/selective splits with deterministic remainder cents
- Custom split validation with 0.01 tolerance
- Net balances per participant with zero-sum integrity check
- Greedy debt netting into suggested transfers
- Category totals for reporting

Architecture:
- splits: compute_shares
- balances: compute_balances, compute_settlements, compute_ledger
- snapshots: frozen input/output records
- exceptions: LedgerError hierarchy
"""

from .balances import (
    compute_balances,
    compute_category_totals,
    compute_ledger,
    compute_settlements,
    settled_participants,
)
from .exceptions import (
    DanglingParticipantReferenceError,
    IntegrityViolationError,
    InvalidAmountError,
    InvalidSplitModeError,
    LedgerError,
    NoParticipantsSelectedError,
    SharesMismatchError,
)
from .snapshots import (
    ExpenseSnapshot,
    LedgerSummary,
    ParticipantSnapshot,
    PaymentMethod,
    Settlement,
)
from .splits import SplitMode, compute_shares


__all__ = [
    # Split Calculator
    'SplitMode',
    'compute_shares',

    # Balance & Settlement Engine
    'compute_balances',
    'compute_settlements',
    'compute_category_totals',
    'compute_ledger',
    'settled_participants',

    # Snapshots
    'PaymentMethod',
    'ParticipantSnapshot',
    'ExpenseSnapshot',
    'Settlement',
    'LedgerSummary',

    # Exceptions
    'LedgerError',
    'InvalidAmountError',
    'NoParticipantsSelectedError',
    'InvalidSplitModeError',
    'SharesMismatchError',
    'DanglingParticipantReferenceError',
    'IntegrityViolationError',
]
