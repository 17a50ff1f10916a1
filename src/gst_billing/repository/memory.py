"""In-memory repository for tests, demos and offline use"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from gst_billing.models.company import Company
from gst_billing.models.customer import Customer
from gst_billing.models.invoice import Invoice
from gst_billing.models.numbering import InvoiceNumberState
from gst_billing.models.product import Product
from gst_billing.models.vehicle import Vehicle
from gst_billing.repository.base import BillingRepository


logger = logging.getLogger(__name__)


class InMemoryRepository(BillingRepository):
    """
    Dict-backed BillingRepository

    Every read and write goes through model_copy(deep=True), so callers
    can never mutate a stored snapshot in place.
    """

    def __init__(self) -> None:
        self._numbering: Dict[str, InvoiceNumberState] = {}
        self._companies: Dict[str, Company] = {}
        self._customers: Dict[str, Dict[str, Customer]] = defaultdict(dict)
        self._products: Dict[str, Dict[str, Product]] = defaultdict(dict)
        self._vehicles: Dict[str, Dict[str, Vehicle]] = defaultdict(dict)
        self._invoices: Dict[str, Dict[str, Invoice]] = defaultdict(dict)

    def get_invoice_number_state(self, account_id: str) -> Optional[InvoiceNumberState]:
        state = self._numbering.get(account_id)
        return state.model_copy() if state else None

    def set_invoice_number_state(
        self, account_id: str, prefix: str, last_number: int
    ) -> None:
        self._numbering[account_id] = InvoiceNumberState(
            account_id=account_id, prefix=prefix, last_number=last_number
        )
        logger.debug(f"Numbering state for {account_id} set to {prefix}{last_number}")

    def get_company_profile(self, account_id: str) -> Optional[Company]:
        company = self._companies.get(account_id)
        return company.model_copy(deep=True) if company else None

    def save_company_profile(self, account_id: str, company: Company) -> None:
        self._companies[account_id] = company.model_copy(deep=True)

    def list_customers(self, account_id: str) -> List[Customer]:
        customers = sorted(self._customers[account_id].values(), key=lambda c: c.name)
        return [c.model_copy(deep=True) for c in customers]

    def get_customer(self, account_id: str, customer_id: str) -> Optional[Customer]:
        customer = self._customers[account_id].get(customer_id)
        return customer.model_copy(deep=True) if customer else None

    def save_customer(self, account_id: str, customer: Customer) -> None:
        self._customers[account_id][customer.id] = customer.model_copy(deep=True)

    def delete_customer(self, account_id: str, customer_id: str) -> None:
        self._customers[account_id].pop(customer_id, None)

    def list_products(self, account_id: str) -> List[Product]:
        products = sorted(self._products[account_id].values(), key=lambda p: p.name)
        return [p.model_copy(deep=True) for p in products]

    def get_product(self, account_id: str, product_id: str) -> Optional[Product]:
        product = self._products[account_id].get(product_id)
        return product.model_copy(deep=True) if product else None

    def save_product(self, account_id: str, product: Product) -> None:
        self._products[account_id][product.id] = product.model_copy(deep=True)

    def delete_product(self, account_id: str, product_id: str) -> None:
        self._products[account_id].pop(product_id, None)

    def list_vehicles(self, account_id: str) -> List[Vehicle]:
        vehicles = sorted(
            self._vehicles[account_id].values(), key=lambda v: v.vehicle_number
        )
        return [v.model_copy() for v in vehicles]

    def get_vehicle(self, account_id: str, vehicle_id: str) -> Optional[Vehicle]:
        vehicle = self._vehicles[account_id].get(vehicle_id)
        return vehicle.model_copy() if vehicle else None

    def save_vehicle(self, account_id: str, vehicle: Vehicle) -> None:
        self._vehicles[account_id][vehicle.id] = vehicle.model_copy()

    def delete_vehicle(self, account_id: str, vehicle_id: str) -> None:
        self._vehicles[account_id].pop(vehicle_id, None)

    def save_invoice(self, account_id: str, invoice: Invoice) -> None:
        self._invoices[account_id][invoice.id] = invoice.model_copy(deep=True)

    def get_invoice(self, account_id: str, invoice_id: str) -> Optional[Invoice]:
        invoice = self._invoices[account_id].get(invoice_id)
        return invoice.model_copy(deep=True) if invoice else None

    def list_invoices(self, account_id: str) -> List[Invoice]:
        invoices = sorted(
            self._invoices[account_id].values(), key=lambda i: i.date, reverse=True
        )
        return [i.model_copy(deep=True) for i in invoices]

    def delete_invoice(self, account_id: str, invoice_id: str) -> None:
        self._invoices[account_id].pop(invoice_id, None)
