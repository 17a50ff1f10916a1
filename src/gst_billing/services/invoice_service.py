"""
Invoice service
Turns an invoice draft into a persisted, fully computed snapshot
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from gst_billing.calculations.amount_words import amount_to_words
from gst_billing.calculations.tax_engine import (
    compute_invoice_totals,
    compute_line_items,
)
from gst_billing.config.billing_config import BillingConfig, ConfigDefaults
from gst_billing.exceptions import BillingError, StorageError
from gst_billing.models.customer import Customer
from gst_billing.models.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    coerce_status,
)
from gst_billing.models.product import Product
from gst_billing.models.vehicle import Vehicle
from gst_billing.repository.base import BillingRepository
from gst_billing.services.numbering import InvoiceNumberAllocator
from gst_billing.services.reporting import filter_invoices
from gst_billing.validation.invoice_validator import InvoiceValidator


logger = logging.getLogger(__name__)


def line_item_from_product(
    product: Product, quantity: float = 1, discount: float = 0
) -> LineItem:
    """Prefill a line from a product: name, HSN/SAC, rate and GST rate"""
    return LineItem(
        id=str(uuid.uuid4()),
        product_id=product.id,
        product_name=product.name,
        hsn_sac_code=product.hsn_sac_code,
        quantity=quantity,
        rate=product.price,
        discount=discount,
        gst_rate=product.gst_rate,
    )


class InvoiceService:
    """
    Invoice creation workflow

    Totals are always recomputed from the draft's item list. The words
    string is rendered once from the grand total when the snapshot is
    built and is stored as-is.

    Example:
        >>> service = InvoiceService(InMemoryRepository())
        >>> draft = service.new_draft("acct-1")
        >>> draft.invoice_number
        'INV-1001'
    """

    def __init__(
        self,
        repository: BillingRepository,
        config: Optional[BillingConfig] = None,
    ) -> None:
        """
        Args:
            repository: Persistence service
            config: Optional configuration supplying numbering defaults
        """
        self._repository = repository
        self._validator = InvoiceValidator()
        self.allocator = InvoiceNumberAllocator(
            repository,
            default_prefix=(
                config.default_invoice_prefix if config else ConfigDefaults.INVOICE_PREFIX
            ),
            default_last_number=(
                config.default_last_invoice_number
                if config else ConfigDefaults.LAST_INVOICE_NUMBER
            ),
        )

    def new_invoice_number(self, account_id: str) -> str:
        return self.allocator.next_invoice_number(account_id)

    def new_draft(self, account_id: str, today: Optional[date] = None) -> InvoiceDraft:
        """Empty draft with the default number, today's date and CREDIT status"""
        return InvoiceDraft(
            invoice_number=self.new_invoice_number(account_id),
            date=(today or date.today()).isoformat(),
            status=InvoiceStatus.CREDIT.value,
        )

    def _load_customer(self, account_id: str, customer_id: Optional[str]) -> Optional[Customer]:
        if not customer_id:
            return None
        return self._repository.get_customer(account_id, customer_id)

    def preview_totals(self, account_id: str, draft: InvoiceDraft) -> InvoiceTotals:
        """
        Live totals for a draft being edited

        Without a company profile there is no supplier GSTIN, so the
        preview is all zeros. No validation is applied.
        """
        company = self._repository.get_company_profile(account_id)
        if company is None:
            return InvoiceTotals()

        customer = self._load_customer(account_id, draft.customer_id)
        return compute_invoice_totals(
            draft.items, company.gstin, customer.gstin if customer else None
        )

    def build_invoice(
        self,
        account_id: str,
        draft: InvoiceDraft,
        now: Optional[datetime] = None,
    ) -> Invoice:
        """
        Build the invoice snapshot for a draft

        Args:
            account_id: Owning account
            draft: Draft collected by the form
            now: Timestamp to stamp on the snapshot (defaults to UTC now)

        Returns:
            Invoice ready to persist

        Raises:
            ValidationError: If the draft fails the form checks
            StorageError: If the company profile, customer or vehicle is missing
        """
        self._validator.validate_or_raise(draft)

        company = self._repository.get_company_profile(account_id)
        if company is None:
            raise StorageError.not_found("Company", account_id)

        customer = self._load_customer(account_id, draft.customer_id)
        if customer is None:
            raise StorageError.not_found("Customer", str(draft.customer_id))

        if draft.vehicle_id and (
            self._repository.get_vehicle(account_id, draft.vehicle_id) is None
        ):
            raise StorageError.not_found("Vehicle", draft.vehicle_id)

        items: List[LineItem] = [
            item if item.id else item.model_copy(update={"id": str(uuid.uuid4())})
            for item in draft.items
        ]
        line_items = compute_line_items(items, company.gstin, customer.gstin)
        totals = compute_invoice_totals(items, company.gstin, customer.gstin)

        timestamp = (now or datetime.now(timezone.utc)).isoformat()
        invoice_id = draft.id or str(uuid.uuid4())

        created_at = timestamp
        if draft.id:
            existing = self._repository.get_invoice(account_id, draft.id)
            if existing is not None and existing.created_at:
                created_at = existing.created_at

        return Invoice(
            id=invoice_id,
            invoice_number=draft.invoice_number or self.new_invoice_number(account_id),
            date=draft.date or (now or datetime.now(timezone.utc)).date().isoformat(),
            customer_id=customer.id,
            customer_name=customer.name,
            customer_gstin=customer.gstin or None,
            customer_address=customer.billing_address,
            vehicle_id=draft.vehicle_id or None,
            items=line_items,
            subtotal=totals.subtotal,
            total_taxable_value=totals.total_taxable_value,
            total_cgst=totals.total_cgst,
            total_sgst=totals.total_sgst,
            total_igst=totals.total_igst,
            total_amount=totals.total_amount,
            amount_in_words=amount_to_words(totals.total_amount),
            notes=draft.notes,
            status=coerce_status(draft.status),
            created_at=created_at,
            updated_at=timestamp,
        )

    def save_invoice(
        self,
        account_id: str,
        draft: InvoiceDraft,
        now: Optional[datetime] = None,
    ) -> Invoice:
        """
        Build, persist and then advance the invoice counter

        The counter update runs only after the invoice is stored, and a
        failure there is logged without failing the save.

        Returns:
            The persisted snapshot
        """
        invoice = self.build_invoice(account_id, draft, now=now)
        self._repository.save_invoice(account_id, invoice)
        logger.info(
            f"Invoice {invoice.invoice_number} saved for {invoice.customer_name}: "
            f"{invoice.total_amount:.2f}"
        )

        try:
            self.allocator.advance(account_id, invoice.invoice_number)
        except BillingError as e:
            logger.warning(
                f"Invoice {invoice.invoice_number} saved but counter not advanced: "
                f"{e.get_description()}"
            )

        return invoice

    def get_invoice(self, account_id: str, invoice_id: str) -> Invoice:
        """
        Raises:
            StorageError: If the invoice does not exist
        """
        invoice = self._repository.get_invoice(account_id, invoice_id)
        if invoice is None:
            raise StorageError.not_found("Invoice", invoice_id)
        return invoice

    def list_invoices(
        self,
        account_id: str,
        search_term: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Invoice]:
        """Stored invoices, newest first, narrowed by the list filters"""
        return filter_invoices(
            self._repository.list_invoices(account_id),
            search_term=search_term,
            status=status,
            date_from=date_from,
            date_to=date_to,
        )

    def delete_invoice(self, account_id: str, invoice_id: str) -> None:
        self._repository.delete_invoice(account_id, invoice_id)
        logger.info(f"Invoice {invoice_id} deleted")

    def add_vehicle(self, account_id: str, vehicle_number: str) -> Optional[Vehicle]:
        """
        Register a vehicle by its registration number

        Returns:
            The stored vehicle, or None when the number is blank
        """
        number = (vehicle_number or "").strip()
        if not number:
            return None

        vehicle = Vehicle(
            id=str(uuid.uuid4()),
            vehicle_number=number,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._repository.save_vehicle(account_id, vehicle)
        logger.info(f"Vehicle {number} added")
        return vehicle

    def vehicle_number_for(self, account_id: str, invoice: Invoice) -> Optional[str]:
        """Registration number to print on the invoice, if one is linked"""
        if not invoice.vehicle_id:
            return None
        vehicle = self._repository.get_vehicle(account_id, invoice.vehicle_id)
        return vehicle.vehicle_number if vehicle else None
