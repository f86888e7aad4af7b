"""
Read-only snapshots the ledger core computes over.

The core never touches the database. The collaborator layer reads an event
and hands these frozen records to the split calculator and balance engine.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PaymentMethod:
    """How a participant can be paid: mobile wallet, bank transfer or QR image."""

    wallet_number: str = ''
    bank_transfer_id: str = ''
    qr_code: str = ''

    @property
    def is_empty(self) -> bool:
        return not (self.wallet_number or self.bank_transfer_id or self.qr_code)


@dataclass(frozen=True)
class ParticipantSnapshot:
    id: str
    name: str = ''
    contact: str = ''
    role: str = 'participant'
    payment_method: Optional[PaymentMethod] = None


@dataclass(frozen=True)
class ExpenseSnapshot:
    id: str
    amount: Decimal
    paid_by: str
    shares: Mapping[str, Decimal] = field(default_factory=dict)
    category: str = 'Other'
    description: str = ''
    split_mode: str = 'equal'
    involved: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Settlement:
    """A suggested transfer from a debtor to a creditor."""

    from_participant: str
    to_participant: str
    amount: Decimal
    payment_method: Optional[PaymentMethod] = None


@dataclass(frozen=True)
class LedgerSummary:
    """
    Everything the summary view needs for one event.

    Attributes:
        balances: participant id -> signed balance, in participant-list order.
            Positive means the participant is owed money.
        settlements: ordered transfers that zero every balance.
        category_totals: category label -> summed expense amount.
        settled: ids of participants whose balance is within tolerance of zero.
        total_expenses: sum of all expense amounts.
        per_person_average: total_expenses divided by participant count.
    """

    balances: Dict[str, Decimal]
    settlements: Tuple[Settlement, ...]
    category_totals: Dict[str, Decimal]
    settled: Tuple[str, ...]
    total_expenses: Decimal
    per_person_average: Decimal
