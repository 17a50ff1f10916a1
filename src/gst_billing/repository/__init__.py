"""Persistence adapters"""

from gst_billing.repository.base import BillingRepository
from gst_billing.repository.memory import InMemoryRepository
from gst_billing.repository.supabase import SupabaseRepository

__all__ = [
    "BillingRepository",
    "InMemoryRepository",
    "SupabaseRepository",
]
