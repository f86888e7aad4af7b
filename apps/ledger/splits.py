"""
Split Calculator
================

Turns an expense amount, a split mode and the set of involved participants
into a shares mapping (participant id -> owed amount).

Equal splits use integer cent arithmetic so the shares always sum to the
amount exactly:

    1. Convert the amount to cents.
    2. Base share: ``cents // n``.
    3. Remainder: ``cents % n``.
    4. The first ``remainder`` participants, in the order given, get one
       extra cent.

Example:
    100.00 split among three people::

        >>> compute_shares(Decimal('100.00'), 'equal', ['a', 'b', 'c'])
        {'a': Decimal('33.34'), 'b': Decimal('33.33'), 'c': Decimal('33.33')}
"""

import logging
from enum import Enum

from .exceptions import (
    InvalidAmountError,
    InvalidSplitModeError,
    NoParticipantsSelectedError,
    SharesMismatchError,
)
from .money import TOLERANCE, ZERO, from_cents, to_cents, to_money


logger = logging.getLogger(__name__)


class SplitMode(str, Enum):
    EQUAL = 'equal'
    CUSTOM = 'custom'
    SELECTIVE = 'selective'


def parse_split_mode(mode):
    """Return the SplitMode for an enum member or its string value."""
    try:
        return SplitMode(mode)
    except ValueError:
        valid = ', '.join(m.value for m in SplitMode)
        raise InvalidSplitModeError(
            f"Invalid split mode: {mode!r}. Valid options: {valid}"
        )


def _unique_in_order(participant_ids):
    seen = set()
    ordered = []
    for participant_id in participant_ids:
        if participant_id not in seen:
            seen.add(participant_id)
            ordered.append(participant_id)
    return ordered


def split_equally(amount, participant_ids):
    """
    Split a cent-quantized amount equally, first participants absorbing the remainder.

    Args:
        amount (Decimal): Amount to split, already quantized to cents.
        participant_ids (list): Ordered, de-duplicated participant ids.

    Returns:
        dict: participant id -> Decimal share, in the order given.
    """
    total_cents = to_cents(amount)
    count = len(participant_ids)

    base_cents = total_cents // count
    remainder_cents = total_cents % count

    shares = {}
    for i, participant_id in enumerate(participant_ids):
        cents = base_cents + 1 if i < remainder_cents else base_cents
        shares[participant_id] = from_cents(cents)
    return shares


def split_custom(amount, participant_ids, custom_shares):
    """
    Validate caller-supplied shares against the amount.

    Participants without an entry owe nothing. Entries for participants that
    are not involved are ignored. A total within 0.01 of the amount is
    accepted and the leftover cent is absorbed by the first involved
    participant who can take it, so the stored shares sum to the amount
    exactly.

    Raises:
        InvalidAmountError: If a share is not a number or is negative.
        SharesMismatchError: If the shares miss the amount by more than 0.01.
    """
    custom_shares = custom_shares or {}
    shares = {}
    for participant_id in participant_ids:
        share = to_money(custom_shares.get(participant_id, ZERO),
                         field=f"share for {participant_id}")
        if share < 0:
            raise InvalidAmountError(
                f"share for {participant_id} cannot be negative, got {share}"
            )
        shares[participant_id] = share

    actual = sum(shares.values(), ZERO)
    if abs(actual - amount) > TOLERANCE:
        raise SharesMismatchError(expected=amount, actual=actual)

    residual = amount - actual
    if residual:
        absorber = next(pid for pid, share in shares.items() if share + residual >= 0)
        shares[absorber] += residual
    return shares


def compute_shares(amount, mode, involved_participants, custom_shares=None):
    """
    Compute the shares mapping for a new expense.

    Args:
        amount (Decimal | int | str | float): The authoritative expense total.
        mode (SplitMode | str): ``equal``, ``selective`` or ``custom``.
            ``selective`` is arithmetically identical to ``equal``; it only
            records that the involved set was picked by hand.
        involved_participants (iterable): Participant ids sharing the expense.
            Order matters for remainder cents.
        custom_shares (dict, optional): participant id -> amount, required
            for ``custom`` mode.

    Returns:
        dict: participant id -> Decimal share, covering exactly the involved
        participants, every value >= 0.

    Raises:
        InvalidAmountError: Amount is non-numeric or not positive.
        InvalidSplitModeError: Unknown split mode.
        NoParticipantsSelectedError: No participants involved.
        SharesMismatchError: Custom shares do not add up to the amount.
    """
    amount = to_money(amount)
    if amount <= 0:
        raise InvalidAmountError(f"amount must be positive, got {amount}")

    split_mode = parse_split_mode(mode)

    participant_ids = _unique_in_order(involved_participants or ())
    if not participant_ids:
        raise NoParticipantsSelectedError("Select at least one participant")

    if split_mode == SplitMode.CUSTOM:
        shares = split_custom(amount, participant_ids, custom_shares)
    else:
        shares = split_equally(amount, participant_ids)

    logger.debug(
        "Split %s %s among %d participants",
        amount, split_mode.value, len(participant_ids),
    )
    return shares
