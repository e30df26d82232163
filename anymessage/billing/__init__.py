# anymessage/billing/__init__.py
from .service import AbstractBillingService, StripeBillingService, get_billing_service

__all__ = [
    "AbstractBillingService",
    "StripeBillingService",
    "get_billing_service",
]
