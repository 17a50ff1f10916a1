"""
Billing Examples for the GST Billing core
Demonstrates configuration, invoice creation and reporting
"""

import logging
from datetime import date

from gst_billing import (
    Address,
    Company,
    ConfigLoader,
    ConfigValidator,
    Customer,
    HttpClient,
    InMemoryRepository,
    InvoiceService,
    Product,
    SupabaseRepository,
    amount_to_words,
    compute_invoice_totals,
    format_currency,
    summarize_invoices,
)
from gst_billing.services import line_item_from_product

ACCOUNT_ID = "demo-account"


# =============================================================================
# Example 1: Tax computation without persistence
# =============================================================================

def tax_example() -> None:
    """Compute totals for a Maharashtra supplier billing a Karnataka buyer"""
    steel = Product(id="p1", name="Steel Rod", hsn_sac_code="7214", gst_rate=18, price=100)

    totals = compute_invoice_totals(
        [line_item_from_product(steel, quantity=2)],
        supplier_gstin="27AAAAA0000A1Z5",
        customer_gstin="29BBBBB1111B2Z6",
    )

    print(f"  Taxable: {format_currency(totals.total_taxable_value)}")
    print(f"  IGST:    {format_currency(totals.total_igst)}")
    print(f"  Total:   {format_currency(totals.total_amount)}")
    print(f"  Words:   {amount_to_words(totals.total_amount)}")


# =============================================================================
# Example 2: Invoice workflow against the in-memory repository
# =============================================================================

def invoice_workflow_example() -> None:
    """Create two invoices and watch the counter advance"""
    repository = InMemoryRepository()
    repository.save_company_profile(ACCOUNT_ID, Company(
        id="company-1",
        business_name="Sharma Traders",
        address=Address(line1="1 Main Road", city="Pune", state="Maharashtra", pincode="411001"),
        gstin="27AAAAA0000A1Z5",
    ))
    repository.save_customer(ACCOUNT_ID, Customer(
        id="cust-1",
        name="Walk-in Customer",
        billing_address=Address(
            line1="2 Station Road", city="Pune", state="Maharashtra", pincode="411002"
        ),
    ))
    cement = Product(id="p2", name="Cement Bag", hsn_sac_code="2523", gst_rate=28, price=350)

    service = InvoiceService(repository)
    truck = service.add_vehicle(ACCOUNT_ID, "MH12AB1234")

    for quantity in (10, 4):
        draft = service.new_draft(ACCOUNT_ID)
        draft.customer_id = "cust-1"
        draft.vehicle_id = truck.id
        draft.items = [line_item_from_product(cement, quantity=quantity)]

        invoice = service.save_invoice(ACCOUNT_ID, draft)
        print(
            f"  {invoice.invoice_number}: {format_currency(invoice.total_amount)} "
            f"({invoice.amount_in_words}), vehicle "
            f"{service.vehicle_number_for(ACCOUNT_ID, invoice)}"
        )

    print(f"  Next number: {service.new_invoice_number(ACCOUNT_ID)}")

    summary = summarize_invoices(service.list_invoices(ACCOUNT_ID))
    print(f"  Outstanding: {format_currency(summary.outstanding_amount)}")


# =============================================================================
# Example 3: Hosted backend
# =============================================================================

def hosted_backend_example() -> None:
    """
    Use the hosted REST backend

    Set these environment variables before running:

    export SUPABASE_URL="https://YOUR_PROJECT.supabase.co"
    export SUPABASE_ANON_KEY="your-anon-key"
    export SUPABASE_ACCESS_TOKEN="signed-in-user-jwt"
    export GST_BILLING_ACCOUNT_ID="your-user-id"
    """
    config = ConfigLoader().load(env=True)

    with HttpClient(config) as client:
        service = InvoiceService(SupabaseRepository(client), config)
        print(f"  Next number: {service.new_invoice_number(config.account_id)}")


# =============================================================================
# Example 4: Configuration validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    result = validator.validate({
        "supabase_url": "not-a-url",
        "default_invoice_prefix": "INV2024-",
    })

    if not result.valid:
        print("  Configuration validation failed:")
        for error in result.errors:
            print(f"    - {error.field}: {error.message}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("=== GST Billing Examples ===\n")

    print("1. Tax computation:")
    tax_example()
    print()

    print("2. Invoice workflow:")
    invoice_workflow_example()
    print()

    print("4. Configuration validation:")
    validation_example()
