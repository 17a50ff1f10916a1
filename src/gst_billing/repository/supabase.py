"""
REST repository for the hosted database backend
Talks to the PostgREST API exposed by a Supabase project
"""

import logging
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from gst_billing.client.http_client import HttpClient, HttpRequestOptions
from gst_billing.exceptions import StorageError
from gst_billing.models.company import Address, Company, ContactDetails
from gst_billing.models.customer import Customer
from gst_billing.models.invoice import Invoice, InvoiceItem, coerce_status
from gst_billing.models.numbering import InvoiceNumberState
from gst_billing.models.product import Product
from gst_billing.models.vehicle import Vehicle
from gst_billing.repository.base import BillingRepository


logger = logging.getLogger(__name__)

COMPANIES = "companies"
CUSTOMERS = "customers"
PRODUCTS = "products"
VEHICLES = "vehicles"
INVOICES = "invoices"
INVOICE_ITEMS = "invoice_items"

UPSERT_HEADERS = {"Prefer": "resolution=merge-duplicates,return=minimal"}
RETURN_HEADERS = {"Prefer": "return=representation"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _eq(value: Any) -> str:
    return f"eq.{value}"


# Row <-> model mapping. Column names follow the backend schema.

def company_from_row(row: Dict[str, Any]) -> Company:
    return Company(
        id=row["id"],
        business_name=row["business_name"],
        address=Address(
            line1=row["address_line1"],
            line2=row.get("address_line2") or "",
            city=row["city"],
            state=row["state"],
            pincode=row["pincode"],
        ),
        gstin=row["gstin"],
        contact=ContactDetails(
            phone=row.get("phone") or "",
            email=row.get("email") or "",
            website=row.get("website") or "",
        ),
        logo=row.get("logo"),
        invoice_prefix=row.get("invoice_prefix"),
        last_invoice_number=row.get("last_invoice_number"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def company_to_row(account_id: str, company: Company) -> Dict[str, Any]:
    # invoice_prefix / last_invoice_number are only written by the allocator
    return {
        "id": company.id,
        "user_id": account_id,
        "business_name": company.business_name,
        "address_line1": company.address.line1,
        "address_line2": company.address.line2 or None,
        "city": company.address.city,
        "state": company.address.state,
        "pincode": company.address.pincode,
        "gstin": company.gstin,
        "phone": company.contact.phone or None,
        "email": company.contact.email or None,
        "website": company.contact.website or None,
        "logo": company.logo or None,
        "updated_at": _utc_now(),
    }


def customer_from_row(row: Dict[str, Any]) -> Customer:
    shipping = None
    if row.get("shipping_address_line1"):
        shipping = Address(
            line1=row["shipping_address_line1"],
            line2=row.get("shipping_address_line2") or "",
            city=row["shipping_city"],
            state=row["shipping_state"],
            pincode=row["shipping_pincode"],
        )

    return Customer(
        id=row["id"],
        name=row["name"],
        type=row.get("type") or "B2C",
        gstin=row.get("gstin"),
        billing_address=Address(
            line1=row["billing_address_line1"],
            line2=row.get("billing_address_line2") or "",
            city=row["billing_city"],
            state=row["billing_state"],
            pincode=row["billing_pincode"],
        ),
        shipping_address=shipping,
        contact=ContactDetails(
            phone=row.get("phone") or "",
            email=row.get("email") or "",
        ),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def customer_to_row(customer: Customer) -> Dict[str, Any]:
    shipping = customer.shipping_address
    return {
        "id": customer.id,
        "name": customer.name,
        "type": customer.type,
        "gstin": customer.gstin or None,
        "billing_address_line1": customer.billing_address.line1,
        "billing_address_line2": customer.billing_address.line2 or None,
        "billing_city": customer.billing_address.city,
        "billing_state": customer.billing_address.state,
        "billing_pincode": customer.billing_address.pincode,
        "shipping_address_line1": shipping.line1 if shipping else None,
        "shipping_address_line2": (shipping.line2 or None) if shipping else None,
        "shipping_city": shipping.city if shipping else None,
        "shipping_state": shipping.state if shipping else None,
        "shipping_pincode": shipping.pincode if shipping else None,
        "phone": customer.contact.phone or None,
        "email": customer.contact.email or None,
        "updated_at": _utc_now(),
    }


def product_from_row(row: Dict[str, Any]) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        description=row.get("description"),
        hsn_sac_code=row["hsn_sac_code"],
        gst_rate=row["gst_rate"],
        unit_of_measurement=row.get("unit_of_measurement") or "NOS",
        price=row["price"],
        type=row.get("type") or "GOODS",
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def product_to_row(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description or None,
        "hsn_sac_code": product.hsn_sac_code,
        "gst_rate": product.gst_rate,
        "unit_of_measurement": product.unit_of_measurement,
        "price": product.price,
        "type": product.type,
        "updated_at": _utc_now(),
    }


def vehicle_from_row(row: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        id=row["id"],
        vehicle_number=row["vehicle_number"],
        created_at=row.get("created_at"),
    )


def vehicle_to_row(account_id: str, vehicle: Vehicle) -> Dict[str, Any]:
    return {
        "id": vehicle.id,
        "user_id": account_id,
        "vehicle_number": vehicle.vehicle_number,
    }


def invoice_item_from_row(row: Dict[str, Any]) -> InvoiceItem:
    return InvoiceItem(
        id=row["id"],
        product_id=row.get("product_id") or None,
        product_name=row["product_name"],
        hsn_sac_code=row.get("hsn_sac_code") or "",
        quantity=row["quantity"],
        rate=row["rate"],
        discount=row.get("discount") or 0,
        gst_rate=row["gst_rate"],
        taxable_value=row["taxable_value"],
        cgst=row.get("cgst") or 0,
        sgst=row.get("sgst") or 0,
        igst=row.get("igst") or 0,
        total_amount=row["total_amount"],
    )


def invoice_item_to_row(invoice_id: str, item: InvoiceItem) -> Dict[str, Any]:
    return {
        "id": item.id or str(uuid.uuid4()),
        "invoice_id": invoice_id,
        "product_id": item.product_id or None,
        "product_name": item.product_name,
        "hsn_sac_code": item.hsn_sac_code,
        "quantity": item.quantity,
        "rate": item.rate,
        "discount": item.discount or 0,
        "taxable_value": item.taxable_value,
        "gst_rate": item.gst_rate,
        "cgst": item.cgst,
        "sgst": item.sgst,
        "igst": item.igst,
        "total_amount": item.total_amount,
    }


def invoice_from_row(row: Dict[str, Any], items: List[InvoiceItem]) -> Invoice:
    return Invoice(
        id=row["id"],
        invoice_number=row["invoice_number"],
        date=row["date"],
        customer_id=row["customer_id"],
        vehicle_id=row.get("vehicle_id") or None,
        customer_name=row["customer_name"],
        customer_gstin=row.get("customer_gstin"),
        customer_address=Address(
            line1=row["customer_address_line1"],
            line2=row.get("customer_address_line2") or "",
            city=row["customer_city"],
            state=row["customer_state"],
            pincode=row["customer_pincode"],
        ),
        items=items,
        subtotal=row["subtotal"],
        total_taxable_value=row["total_taxable_value"],
        total_cgst=row["total_cgst"],
        total_sgst=row["total_sgst"],
        total_igst=row["total_igst"],
        total_amount=row["total_amount"],
        amount_in_words=row["amount_in_words"],
        notes=row.get("notes"),
        # Rows written before the two-state rule may still say DRAFT/SENT
        status=coerce_status(row.get("status")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def invoice_to_row(account_id: str, company_id: str, invoice: Invoice) -> Dict[str, Any]:
    return {
        "id": invoice.id,
        "user_id": account_id,
        "company_id": company_id,
        "invoice_number": invoice.invoice_number,
        "date": invoice.date,
        "customer_id": invoice.customer_id,
        "vehicle_id": invoice.vehicle_id or None,
        "customer_name": invoice.customer_name,
        "customer_gstin": invoice.customer_gstin or None,
        "customer_address_line1": invoice.customer_address.line1,
        "customer_address_line2": invoice.customer_address.line2 or None,
        "customer_city": invoice.customer_address.city,
        "customer_state": invoice.customer_address.state,
        "customer_pincode": invoice.customer_address.pincode,
        "subtotal": invoice.subtotal,
        "total_taxable_value": invoice.total_taxable_value,
        "total_cgst": invoice.total_cgst,
        "total_sgst": invoice.total_sgst,
        "total_igst": invoice.total_igst,
        "total_amount": invoice.total_amount,
        "amount_in_words": invoice.amount_in_words,
        "notes": invoice.notes or None,
        "status": coerce_status(invoice.status).value,
        "updated_at": invoice.updated_at or _utc_now(),
    }


class SupabaseRepository(BillingRepository):
    """
    BillingRepository backed by the hosted REST API

    Companies, vehicles and invoices are filtered by user_id. Customers and
    products carry no owner column and rely on the backend's
    row-level security policies for scoping.

    Example:
        >>> config = ConfigLoader().load()
        >>> with HttpClient(config) as client:
        ...     repo = SupabaseRepository(client)
        ...     repo.list_customers(config.account_id)
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    def _select(
        self,
        table: str,
        filters: Optional[Dict[str, str]] = None,
        columns: str = "*",
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit

        response = self._client.get(f"/{table}", HttpRequestOptions(params=params))
        return response.data or []

    def _select_one(
        self, table: str, filters: Dict[str, str], columns: str = "*"
    ) -> Optional[Dict[str, Any]]:
        rows = self._select(table, filters, columns=columns, limit=1)
        return rows[0] if rows else None

    def _upsert(self, table: str, rows: Any) -> None:
        self._client.post(f"/{table}", rows, HttpRequestOptions(headers=UPSERT_HEADERS))

    def _insert(self, table: str, rows: Any) -> None:
        self._client.post(f"/{table}", rows)

    def _update(self, table: str, filters: Dict[str, str], values: Dict[str, Any]) -> List[Any]:
        response = self._client.patch(
            f"/{table}",
            values,
            HttpRequestOptions(params=filters, headers=RETURN_HEADERS),
        )
        return response.data or []

    def _delete(self, table: str, filters: Dict[str, str]) -> None:
        self._client.delete(f"/{table}", HttpRequestOptions(params=filters))

    # Invoice numbering

    def get_invoice_number_state(self, account_id: str) -> Optional[InvoiceNumberState]:
        row = self._select_one(
            COMPANIES,
            {"user_id": _eq(account_id)},
            columns="invoice_prefix,last_invoice_number",
        )
        if row is None:
            return None

        return InvoiceNumberState(
            account_id=account_id,
            prefix=row.get("invoice_prefix"),
            last_number=row.get("last_invoice_number"),
        )

    def set_invoice_number_state(
        self, account_id: str, prefix: str, last_number: int
    ) -> None:
        updated = self._update(
            COMPANIES,
            {"user_id": _eq(account_id)},
            {"invoice_prefix": prefix, "last_invoice_number": last_number},
        )
        if not updated:
            logger.warning(
                f"No company row for account {account_id}; numbering state not stored"
            )

    # Company profile

    def get_company_profile(self, account_id: str) -> Optional[Company]:
        row = self._select_one(COMPANIES, {"user_id": _eq(account_id)})
        return company_from_row(row) if row else None

    def save_company_profile(self, account_id: str, company: Company) -> None:
        self._upsert(COMPANIES, company_to_row(account_id, company))

    # Customers

    def list_customers(self, account_id: str) -> List[Customer]:
        return [customer_from_row(r) for r in self._select(CUSTOMERS, order="name")]

    def get_customer(self, account_id: str, customer_id: str) -> Optional[Customer]:
        row = self._select_one(CUSTOMERS, {"id": _eq(customer_id)})
        return customer_from_row(row) if row else None

    def save_customer(self, account_id: str, customer: Customer) -> None:
        self._upsert(CUSTOMERS, customer_to_row(customer))

    def delete_customer(self, account_id: str, customer_id: str) -> None:
        self._delete(CUSTOMERS, {"id": _eq(customer_id)})

    # Products

    def list_products(self, account_id: str) -> List[Product]:
        return [product_from_row(r) for r in self._select(PRODUCTS, order="name")]

    def get_product(self, account_id: str, product_id: str) -> Optional[Product]:
        row = self._select_one(PRODUCTS, {"id": _eq(product_id)})
        return product_from_row(row) if row else None

    def save_product(self, account_id: str, product: Product) -> None:
        self._upsert(PRODUCTS, product_to_row(product))

    def delete_product(self, account_id: str, product_id: str) -> None:
        self._delete(PRODUCTS, {"id": _eq(product_id)})

    # Vehicles

    def list_vehicles(self, account_id: str) -> List[Vehicle]:
        rows = self._select(VEHICLES, {"user_id": _eq(account_id)}, order="vehicle_number")
        return [vehicle_from_row(r) for r in rows]

    def get_vehicle(self, account_id: str, vehicle_id: str) -> Optional[Vehicle]:
        row = self._select_one(
            VEHICLES, {"id": _eq(vehicle_id), "user_id": _eq(account_id)}
        )
        return vehicle_from_row(row) if row else None

    def save_vehicle(self, account_id: str, vehicle: Vehicle) -> None:
        self._upsert(VEHICLES, vehicle_to_row(account_id, vehicle))

    def delete_vehicle(self, account_id: str, vehicle_id: str) -> None:
        self._delete(VEHICLES, {"id": _eq(vehicle_id), "user_id": _eq(account_id)})

    # Invoices

    def save_invoice(self, account_id: str, invoice: Invoice) -> None:
        """
        Upsert the invoice header, then replace its items

        Raises:
            StorageError: If the account has no company profile
        """
        company = self._select_one(COMPANIES, {"user_id": _eq(account_id)}, columns="id")
        if company is None or not company.get("id"):
            raise StorageError.not_found("Company", account_id)

        self._upsert(INVOICES, invoice_to_row(account_id, company["id"], invoice))
        self._delete(INVOICE_ITEMS, {"invoice_id": _eq(invoice.id)})

        if invoice.items:
            self._insert(
                INVOICE_ITEMS,
                [invoice_item_to_row(invoice.id, item) for item in invoice.items],
            )

        logger.info(
            f"Saved invoice {invoice.invoice_number} ({len(invoice.items)} items)"
        )

    def get_invoice(self, account_id: str, invoice_id: str) -> Optional[Invoice]:
        row = self._select_one(
            INVOICES, {"id": _eq(invoice_id), "user_id": _eq(account_id)}
        )
        if row is None:
            return None

        item_rows = self._select(
            INVOICE_ITEMS, {"invoice_id": _eq(invoice_id)}, order="created_at"
        )
        return invoice_from_row(row, [invoice_item_from_row(r) for r in item_rows])

    def list_invoices(self, account_id: str) -> List[Invoice]:
        rows = self._select(INVOICES, {"user_id": _eq(account_id)}, order="date.desc")
        if not rows:
            return []

        ids = ",".join(row["id"] for row in rows)
        item_rows = self._select(
            INVOICE_ITEMS, {"invoice_id": f"in.({ids})"}, order="created_at"
        )

        items_by_invoice: Dict[str, List[InvoiceItem]] = defaultdict(list)
        for item_row in item_rows:
            items_by_invoice[item_row["invoice_id"]].append(invoice_item_from_row(item_row))

        return [invoice_from_row(row, items_by_invoice[row["id"]]) for row in rows]

    def delete_invoice(self, account_id: str, invoice_id: str) -> None:
        # Items first, for the foreign key
        self._delete(INVOICE_ITEMS, {"invoice_id": _eq(invoice_id)})
        self._delete(INVOICES, {"id": _eq(invoice_id), "user_id": _eq(account_id)})
