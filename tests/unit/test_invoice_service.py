"""
Invoice Service Unit Tests
"""

from datetime import date, datetime, timezone

import pytest

from gst_billing.config import BillingConfig
from gst_billing.exceptions import StorageError, ValidationError
from gst_billing.models import (
    Address,
    Company,
    Customer,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    Product,
    Vehicle,
)
from gst_billing.repository import InMemoryRepository
from gst_billing.services import InvoiceService
from gst_billing.services.invoice_service import line_item_from_product

ACCOUNT = "acct-1"
NOW = datetime(2024, 4, 15, 10, 30, tzinfo=timezone.utc)


def make_address(state: str = "Maharashtra") -> Address:
    return Address(line1="1 Main Road", city="Pune", state=state, pincode="411001")


@pytest.fixture
def repository():
    repo = InMemoryRepository()
    repo.save_company_profile(ACCOUNT, Company(
        id="company-1",
        business_name="Sharma Traders",
        address=make_address(),
        gstin="27AAAAA0000A1Z5",
    ))
    repo.save_customer(ACCOUNT, Customer(
        id="cust-ka",
        name="Bangalore Retail",
        type="B2B",
        gstin="29BBBBB1111B2Z6",
        billing_address=make_address("Karnataka"),
    ))
    repo.save_customer(ACCOUNT, Customer(
        id="cust-mh",
        name="Mumbai Stores",
        type="B2B",
        gstin="27CCCCC2222C3Z7",
        billing_address=make_address(),
    ))
    repo.save_customer(ACCOUNT, Customer(
        id="cust-b2c",
        name="Walk-in Customer",
        billing_address=make_address(),
    ))
    return repo


@pytest.fixture
def service(repository):
    return InvoiceService(repository)


def make_draft(customer_id: str = "cust-ka", **overrides) -> InvoiceDraft:
    values = {
        "invoice_number": "INV-1001",
        "date": "2024-04-15",
        "customer_id": customer_id,
        "items": [LineItem(product_name="Steel Rod", quantity=2, rate=100, gst_rate=18)],
    }
    values.update(overrides)
    return InvoiceDraft(**values)


class TestNewDraft:
    """Tests for draft creation"""

    def test_default_number(self, service):
        """Should propose the next invoice number"""
        draft = service.new_draft(ACCOUNT, today=date(2024, 4, 15))
        assert draft.invoice_number == "INV-1001"
        assert draft.date == "2024-04-15"
        assert draft.status == "CREDIT"
        assert draft.items == []

    def test_configured_defaults(self, repository):
        """Should take numbering defaults from the configuration"""
        config = BillingConfig(
            supabase_url="https://example.supabase.co",
            supabase_anon_key="anon-key",
            default_invoice_prefix="GST-",
            default_last_invoice_number=0,
        )
        service = InvoiceService(repository, config)
        assert service.new_invoice_number(ACCOUNT) == "GST-1"

    def test_line_item_from_product(self):
        """Should prefill the line from the product master"""
        product = Product(
            id="prod-1", name="Cement Bag", hsn_sac_code="2523", gst_rate=28, price=350
        )
        line = line_item_from_product(product, quantity=4)
        assert line.product_id == "prod-1"
        assert line.product_name == "Cement Bag"
        assert line.hsn_sac_code == "2523"
        assert line.rate == 350
        assert line.gst_rate == 28
        assert line.quantity == 4
        assert line.id


class TestPreviewTotals:
    """Tests for live totals"""

    def test_preview(self, service):
        """Should compute totals without saving"""
        totals = service.preview_totals(ACCOUNT, make_draft())
        assert totals.total_igst == 36
        assert totals.total_amount == 236
        assert service.list_invoices(ACCOUNT) == []

    def test_preview_without_customer(self, service):
        """Should treat a draft with no customer as intra-state"""
        totals = service.preview_totals(ACCOUNT, make_draft(customer_id=None))
        assert totals.total_cgst == 18
        assert totals.total_sgst == 18

    def test_preview_without_company(self):
        """Should return zeros when no company profile exists"""
        service = InvoiceService(InMemoryRepository())
        assert service.preview_totals(ACCOUNT, make_draft()) == InvoiceTotals()


class TestSaveInvoice:
    """Tests for the save workflow"""

    def test_inter_state_invoice(self, service):
        """Should store IGST totals and the amount in words"""
        invoice = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        assert invoice.total_igst == 36
        assert invoice.total_cgst == 0
        assert invoice.total_amount == 236
        assert invoice.amount_in_words == "Two Hundred Thirty Six Rupees Only"
        assert invoice.customer_name == "Bangalore Retail"
        assert invoice.customer_gstin == "29BBBBB1111B2Z6"
        assert invoice.items[0].igst == 36
        assert invoice.items[0].id

    def test_intra_state_invoice(self, service):
        """Should split tax for a same-state customer"""
        invoice = service.save_invoice(ACCOUNT, make_draft("cust-mh"), now=NOW)
        assert invoice.total_cgst == 18
        assert invoice.total_sgst == 18
        assert invoice.total_igst == 0

    def test_b2c_invoice(self, service):
        """Should split tax for a customer without GSTIN"""
        invoice = service.save_invoice(ACCOUNT, make_draft("cust-b2c"), now=NOW)
        assert invoice.customer_gstin is None
        assert invoice.total_cgst == 18
        assert invoice.total_igst == 0

    def test_persists_snapshot(self, service):
        """Should make the saved invoice retrievable"""
        invoice = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        stored = service.get_invoice(ACCOUNT, invoice.id)
        assert stored == invoice
        assert stored.created_at == NOW.isoformat()

    def test_advances_counter(self, service):
        """Should propose the following number after saving"""
        service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        assert service.new_invoice_number(ACCOUNT) == "INV-1002"

    def test_user_edited_number_moves_counter(self, service):
        """Should follow the number actually saved"""
        service.save_invoice(ACCOUNT, make_draft(invoice_number="INV-0990"), now=NOW)
        assert service.new_invoice_number(ACCOUNT) == "INV-991"

    def test_numeric_number_leaves_counter(self, service):
        """Should save the invoice but keep the counter for unparseable numbers"""
        invoice = service.save_invoice(ACCOUNT, make_draft(invoice_number="2031"), now=NOW)
        assert invoice.invoice_number == "2031"
        assert service.new_invoice_number(ACCOUNT) == "INV-1001"

    def test_missing_number_is_allocated(self, service):
        """Should allocate a number when the draft has none"""
        invoice = service.save_invoice(ACCOUNT, make_draft(invoice_number=None), now=NOW)
        assert invoice.invoice_number == "INV-1001"

    def test_missing_date_uses_today(self, service):
        """Should date the invoice from the save timestamp"""
        invoice = service.save_invoice(ACCOUNT, make_draft(date=None), now=NOW)
        assert invoice.date == "2024-04-15"

    @pytest.mark.parametrize("label,expected", [
        ("PAID", InvoiceStatus.PAID),
        ("CREDIT", InvoiceStatus.CREDIT),
        ("DRAFT", InvoiceStatus.CREDIT),
        ("SENT", InvoiceStatus.CREDIT),
        ("paid", InvoiceStatus.CREDIT),
        (None, InvoiceStatus.CREDIT),
    ])
    def test_status_coercion(self, service, label, expected):
        """Should store only CREDIT or PAID"""
        invoice = service.save_invoice(ACCOUNT, make_draft(status=label), now=NOW)
        assert invoice.status == expected

    def test_counter_failure_does_not_fail_save(self, repository, service, monkeypatch):
        """Should keep the saved invoice when the counter update fails"""
        def fail(*args, **kwargs):
            raise StorageError("write rejected")

        monkeypatch.setattr(repository, "set_invoice_number_state", fail)

        invoice = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        assert service.get_invoice(ACCOUNT, invoice.id) == invoice
        assert service.new_invoice_number(ACCOUNT) == "INV-1001"

    def test_edit_keeps_created_at(self, service):
        """Should keep the original creation time when re-saving"""
        first = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        later = datetime(2024, 5, 1, tzinfo=timezone.utc)
        edited = service.save_invoice(
            ACCOUNT, make_draft(id=first.id, notes="Revised"), now=later
        )
        assert edited.id == first.id
        assert edited.created_at == first.created_at
        assert edited.updated_at == later.isoformat()
        assert len(service.list_invoices(ACCOUNT)) == 1

    def test_words_are_a_snapshot(self, service):
        """Should store the words rendered at save time"""
        invoice = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        invoice.amount_in_words = "changed"
        assert service.get_invoice(ACCOUNT, invoice.id).amount_in_words == (
            "Two Hundred Thirty Six Rupees Only"
        )


class TestSaveInvoiceErrors:
    """Tests for rejected saves"""

    def test_requires_customer(self, service):
        """Should reject a draft without a customer"""
        with pytest.raises(ValidationError) as exc_info:
            service.save_invoice(ACCOUNT, make_draft(customer_id=None))
        assert exc_info.value.field == "customer"

    def test_requires_items(self, service):
        """Should reject a draft without items"""
        with pytest.raises(ValidationError) as exc_info:
            service.save_invoice(ACCOUNT, make_draft(items=[]))
        assert exc_info.value.field == "items"

    def test_rejects_zero_quantity(self, service):
        """Should reject non-positive quantities"""
        items = [LineItem(product_name="Steel Rod", quantity=0, rate=100, gst_rate=18)]
        with pytest.raises(ValidationError) as exc_info:
            service.save_invoice(ACCOUNT, make_draft(items=items))
        assert exc_info.value.field == "item_0_quantity"

    def test_unknown_customer(self, service):
        """Should raise when the customer does not exist"""
        with pytest.raises(StorageError) as exc_info:
            service.save_invoice(ACCOUNT, make_draft(customer_id="missing"))
        assert exc_info.value.has_code("STORAGE_NOT_FOUND")

    def test_missing_company(self):
        """Should raise when the account has no company profile"""
        service = InvoiceService(InMemoryRepository())
        with pytest.raises(StorageError):
            service.save_invoice(ACCOUNT, make_draft())

    def test_failed_save_leaves_counter(self, service):
        """Should not advance the counter when the save is rejected"""
        with pytest.raises(ValidationError):
            service.save_invoice(ACCOUNT, make_draft(items=[]))
        assert service.new_invoice_number(ACCOUNT) == "INV-1001"


class TestInvoiceQueries:
    """Tests for listing, fetching and deleting invoices"""

    def test_list_newest_first(self, service):
        """Should list invoices by date, newest first"""
        service.save_invoice(ACCOUNT, make_draft(date="2024-04-01"), now=NOW)
        service.save_invoice(
            ACCOUNT, make_draft(invoice_number="INV-1002", date="2024-04-10"), now=NOW
        )
        numbers = [i.invoice_number for i in service.list_invoices(ACCOUNT)]
        assert numbers == ["INV-1002", "INV-1001"]

    def test_list_with_search(self, service):
        """Should apply list filters"""
        service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        service.save_invoice(
            ACCOUNT, make_draft("cust-mh", invoice_number="INV-1002"), now=NOW
        )
        result = service.list_invoices(ACCOUNT, search_term="mumbai")
        assert [i.customer_name for i in result] == ["Mumbai Stores"]

    def test_get_missing(self, service):
        """Should raise for unknown invoices"""
        with pytest.raises(StorageError):
            service.get_invoice(ACCOUNT, "missing")

    def test_delete(self, service):
        """Should remove the invoice"""
        invoice = service.save_invoice(ACCOUNT, make_draft(), now=NOW)
        service.delete_invoice(ACCOUNT, invoice.id)
        assert service.list_invoices(ACCOUNT) == []


class TestVehicles:
    """Tests for vehicle registration and invoice linkage"""

    def test_add_vehicle_trims_number(self, repository, service):
        """Should store the trimmed registration number"""
        vehicle = service.add_vehicle(ACCOUNT, "  MH12AB1234 ")
        assert vehicle is not None
        assert vehicle.vehicle_number == "MH12AB1234"
        assert repository.get_vehicle(ACCOUNT, vehicle.id) == vehicle

    @pytest.mark.parametrize("number", ["", "   ", None])
    def test_add_blank_vehicle_is_ignored(self, repository, service, number):
        """Should not store a blank registration number"""
        assert service.add_vehicle(ACCOUNT, number) is None
        assert repository.list_vehicles(ACCOUNT) == []

    def test_list_ordered_by_number(self, repository, service):
        """Should list vehicles by registration number"""
        service.add_vehicle(ACCOUNT, "MH14ZZ0001")
        service.add_vehicle(ACCOUNT, "KA01AA0001")
        numbers = [v.vehicle_number for v in repository.list_vehicles(ACCOUNT)]
        assert numbers == ["KA01AA0001", "MH14ZZ0001"]

    def test_vehicles_are_per_account(self, repository, service):
        """Should keep vehicles scoped to their account"""
        service.add_vehicle("other", "MH12AB1234")
        assert repository.list_vehicles(ACCOUNT) == []

    def test_delete_vehicle(self, repository, service):
        """Should remove the vehicle"""
        vehicle = service.add_vehicle(ACCOUNT, "MH12AB1234")
        repository.delete_vehicle(ACCOUNT, vehicle.id)
        assert repository.get_vehicle(ACCOUNT, vehicle.id) is None

    def test_invoice_keeps_vehicle(self, repository, service):
        """Should carry the selected vehicle onto the stored snapshot"""
        vehicle = service.add_vehicle(ACCOUNT, "MH12AB1234")
        invoice = service.save_invoice(
            ACCOUNT, make_draft(vehicle_id=vehicle.id), now=NOW
        )
        assert invoice.vehicle_id == vehicle.id
        assert repository.get_invoice(ACCOUNT, invoice.id).vehicle_id == vehicle.id
        assert service.vehicle_number_for(ACCOUNT, invoice) == "MH12AB1234"

    def test_invoice_without_vehicle(self, service):
        """Should leave the vehicle unset when none is selected"""
        invoice = service.save_invoice(ACCOUNT, make_draft(vehicle_id=""), now=NOW)
        assert invoice.vehicle_id is None
        assert service.vehicle_number_for(ACCOUNT, invoice) is None

    def test_unknown_vehicle(self, service):
        """Should raise when the selected vehicle does not exist"""
        with pytest.raises(StorageError) as exc_info:
            service.save_invoice(ACCOUNT, make_draft(vehicle_id="missing"))
        assert exc_info.value.has_code("STORAGE_NOT_FOUND")
        assert service.new_invoice_number(ACCOUNT) == "INV-1001"

    def test_deleted_vehicle_prints_nothing(self, repository, service):
        """Should resolve no number once the linked vehicle is gone"""
        vehicle = service.add_vehicle(ACCOUNT, "MH12AB1234")
        invoice = service.save_invoice(
            ACCOUNT, make_draft(vehicle_id=vehicle.id), now=NOW
        )
        repository.delete_vehicle(ACCOUNT, vehicle.id)
        assert service.vehicle_number_for(ACCOUNT, invoice) is None
