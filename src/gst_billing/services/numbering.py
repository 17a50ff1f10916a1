"""
Invoice number allocation
Proposes the next invoice number and advances the stored counter
"""

import logging
from typing import Optional

from gst_billing.calculations.invoice_number import (
    DEFAULT_LAST_NUMBER,
    DEFAULT_PREFIX,
    default_invoice_number,
    parse_invoice_number,
)
from gst_billing.models.numbering import InvoiceNumberState, ParsedInvoiceNumber
from gst_billing.repository.base import BillingRepository


logger = logging.getLogger(__name__)


class InvoiceNumberAllocator:
    """
    Reads and advances the per-account prefix/counter pair

    State is read from the repository on every call and never cached.
    The read-then-write in advance() is not atomic: two concurrent saves
    may propose the same number, and the last write wins.

    Example:
        >>> allocator = InvoiceNumberAllocator(InMemoryRepository())
        >>> allocator.next_invoice_number("acct-1")
        'INV-1001'
    """

    def __init__(
        self,
        repository: BillingRepository,
        default_prefix: str = DEFAULT_PREFIX,
        default_last_number: int = DEFAULT_LAST_NUMBER,
    ) -> None:
        self._repository = repository
        self.default_prefix = default_prefix
        self.default_last_number = default_last_number

    def current_state(self, account_id: str) -> InvoiceNumberState:
        """
        Stored numbering state with defaults filled in

        An empty stored prefix or a missing or zero counter falls back to
        the configured defaults independently.
        """
        stored = self._repository.get_invoice_number_state(account_id)

        prefix = stored.prefix if stored and stored.prefix else self.default_prefix
        last_number = (
            stored.last_number
            if stored and stored.last_number
            else self.default_last_number
        )

        return InvoiceNumberState(
            account_id=account_id, prefix=prefix, last_number=last_number
        )

    def next_invoice_number(self, account_id: str) -> str:
        """Default number for a new invoice"""
        state = self.current_state(account_id)
        return default_invoice_number(state.prefix, state.last_number)

    def advance(
        self, account_id: str, invoice_number: Optional[str]
    ) -> Optional[ParsedInvoiceNumber]:
        """
        Store the saved invoice's number as the new "last used" state

        Call only after the invoice itself has been saved. Numbers may
        move backwards or repeat; nothing is checked against the stored
        counter. A number that does not parse leaves the state untouched.

        Args:
            account_id: Owning account
            invoice_number: Invoice number as saved

        Returns:
            The stored prefix/number, or None when nothing was written
        """
        parsed = parse_invoice_number(invoice_number)

        if parsed is None:
            logger.debug(
                f"Invoice number {invoice_number!r} has no prefix/number form; "
                "counter left unchanged"
            )
            return None

        self._repository.set_invoice_number_state(
            account_id, parsed.prefix, parsed.number
        )
        logger.debug(f"Counter for {account_id} advanced to {parsed.prefix}{parsed.number}")
        return parsed
