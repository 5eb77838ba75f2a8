"""Item availability state machine.

State Flow:
    AVAILABLE → LOANED (loan) → AVAILABLE (return)

No terminal state. New items start AVAILABLE. Removal from the catalog is
only allowed while AVAILABLE.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from .exceptions import InvalidOperation, StateTransitionError
from .models import Availability, Item, LoanRecord, StateChange, utcnow


logger = logging.getLogger(__name__)

DEFAULT_LOAN_DAYS = 14

ALLOWED_TRANSITIONS: Dict[Availability, List[Availability]] = {
    Availability.AVAILABLE: [Availability.LOANED],
    Availability.LOANED: [Availability.AVAILABLE],
}

# States from which an item may be deleted
REMOVABLE_STATES = frozenset({Availability.AVAILABLE})


def can_transition(current_state: Availability, new_state: Availability) -> bool:
    """Check if a transition is allowed without raising.

    Example:
        >>> can_transition(Availability.AVAILABLE, Availability.LOANED)
        True
        >>> can_transition(Availability.LOANED, Availability.LOANED)
        False
    """
    return new_state in ALLOWED_TRANSITIONS.get(current_state, [])


def get_allowed_transitions(state: Availability) -> List[Availability]:
    return ALLOWED_TRANSITIONS.get(state, [])


def validate_transition(current_state: Availability, new_state: Availability) -> None:
    """Validate that a transition is allowed.

    Raises:
        StateTransitionError: If the transition is not allowed
    """
    if not can_transition(current_state, new_state):
        raise StateTransitionError(
            f"Invalid transition: {current_state.value} -> {new_state.value}. "
            f"Allowed transitions from {current_state.value}: "
            f"{[s.value for s in get_allowed_transitions(current_state)]}"
        )


class ItemLifecycle:
    """Applies loan, return and removal rules to items.

    Successful transitions mutate the item's availability, stamp updated_at
    and return a StateChange describing old and new state. Rejected
    transitions raise InvalidOperation and leave the item untouched.
    """

    def __init__(self, default_loan_days: int = DEFAULT_LOAN_DAYS):
        if default_loan_days < 1:
            raise ValueError(f"default_loan_days must be at least 1 (got {default_loan_days})")
        self.default_loan_days = default_loan_days

    def loan(
        self,
        item: Item,
        borrower: Optional[str] = None,
        loan_days: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> StateChange:
        """Lend an AVAILABLE item and open a loan record."""
        if not can_transition(item.availability, Availability.LOANED):
            raise StateTransitionError(f"Item '{item.title}' is not available for loan")

        now = now or utcnow()
        loan = LoanRecord.open(
            item_id=item.id,
            loan_days=loan_days if loan_days is not None else self.default_loan_days,
            borrower=borrower,
            now=now
        )
        return self._apply(item, Availability.LOANED, now, loan)

    def return_item(
        self,
        item: Item,
        loan: Optional[LoanRecord] = None,
        now: Optional[datetime] = None
    ) -> StateChange:
        """Take back a LOANED item and close its loan record if given."""
        if not can_transition(item.availability, Availability.AVAILABLE):
            raise StateTransitionError(f"Item '{item.title}' is not on loan")

        now = now or utcnow()
        if loan is not None and loan.is_open:
            loan.close(now)
        return self._apply(item, Availability.AVAILABLE, now, loan)

    def ensure_removable(self, item: Item) -> None:
        """Raise InvalidOperation unless the item may be deleted."""
        if item.availability not in REMOVABLE_STATES:
            raise InvalidOperation(
                f"Item '{item.title}' cannot be removed because it is on loan"
            )

    def _apply(
        self,
        item: Item,
        new_state: Availability,
        now: datetime,
        loan: Optional[LoanRecord]
    ) -> StateChange:
        old_state = item.availability
        validate_transition(old_state, new_state)
        item.availability = new_state
        item.touch(now)

        logger.debug(f"Item {item.id} transitioned {old_state.value} -> {new_state.value}")
        return StateChange(
            item=item,
            old_state=old_state,
            new_state=new_state,
            occurred_at=now,
            loan=loan
        )
