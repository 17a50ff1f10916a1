"""
Persistence interface
The billing core reads master data and numbering state through this
interface and writes invoice snapshots back through it
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from gst_billing.models.company import Company
from gst_billing.models.customer import Customer
from gst_billing.models.invoice import Invoice
from gst_billing.models.numbering import InvoiceNumberState
from gst_billing.models.product import Product
from gst_billing.models.vehicle import Vehicle


class BillingRepository(ABC):
    """
    Abstract persistence service

    Records are scoped by account (the signed-in user). Implementations
    raise StorageError or NetworkError on failure and return None or an
    empty list when nothing is stored.
    """

    # Invoice numbering

    @abstractmethod
    def get_invoice_number_state(self, account_id: str) -> Optional[InvoiceNumberState]:
        """Stored prefix/last-number pair, or None when nothing is stored"""

    @abstractmethod
    def set_invoice_number_state(
        self, account_id: str, prefix: str, last_number: int
    ) -> None:
        """Overwrite the stored prefix/last-number pair"""

    # Company profile

    @abstractmethod
    def get_company_profile(self, account_id: str) -> Optional[Company]:
        ...

    @abstractmethod
    def save_company_profile(self, account_id: str, company: Company) -> None:
        ...

    # Customers

    @abstractmethod
    def list_customers(self, account_id: str) -> List[Customer]:
        """Customers ordered by name"""

    @abstractmethod
    def get_customer(self, account_id: str, customer_id: str) -> Optional[Customer]:
        ...

    @abstractmethod
    def save_customer(self, account_id: str, customer: Customer) -> None:
        ...

    @abstractmethod
    def delete_customer(self, account_id: str, customer_id: str) -> None:
        ...

    # Products

    @abstractmethod
    def list_products(self, account_id: str) -> List[Product]:
        """Products ordered by name"""

    @abstractmethod
    def get_product(self, account_id: str, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def save_product(self, account_id: str, product: Product) -> None:
        ...

    @abstractmethod
    def delete_product(self, account_id: str, product_id: str) -> None:
        ...

    # Vehicles

    @abstractmethod
    def list_vehicles(self, account_id: str) -> List[Vehicle]:
        """Vehicles ordered by registration number"""

    @abstractmethod
    def get_vehicle(self, account_id: str, vehicle_id: str) -> Optional[Vehicle]:
        ...

    @abstractmethod
    def save_vehicle(self, account_id: str, vehicle: Vehicle) -> None:
        ...

    @abstractmethod
    def delete_vehicle(self, account_id: str, vehicle_id: str) -> None:
        ...

    # Invoices

    @abstractmethod
    def save_invoice(self, account_id: str, invoice: Invoice) -> None:
        """Insert or replace an invoice snapshot together with its items"""

    @abstractmethod
    def get_invoice(self, account_id: str, invoice_id: str) -> Optional[Invoice]:
        ...

    @abstractmethod
    def list_invoices(self, account_id: str) -> List[Invoice]:
        """Invoices ordered by date, newest first"""

    @abstractmethod
    def delete_invoice(self, account_id: str, invoice_id: str) -> None:
        ...
