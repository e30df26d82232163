# anymessage/billing/service.py
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import stripe

from ..settings import settings

logger = logging.getLogger(__name__)


class AbstractBillingService(ABC):
    """Interface for the external billing-status collaborator."""

    @abstractmethod
    async def has_active_subscription(self, customer_id: Optional[str]) -> bool:
        """Return True if the billing customer has at least one active subscription."""
        pass


class StripeBillingService(AbstractBillingService):
    """Billing status backed by Stripe subscriptions."""

    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key
        if not api_key:
            logger.warning("StripeBillingService: STRIPE_SECRET_KEY is not set. Subscription checks will fail.")

    def _list_active_subscriptions(self, customer_id: str):
        return stripe.Subscription.list(customer=customer_id, status="active", limit=1, api_key=self.api_key)

    async def has_active_subscription(self, customer_id: Optional[str]) -> bool:
        # Teams without a billing customer have never subscribed
        if not customer_id:
            return False
        if not self.api_key:
            raise RuntimeError("Stripe is not configured (STRIPE_SECRET_KEY missing).")

        subscriptions = await asyncio.to_thread(self._list_active_subscriptions, customer_id)
        active = len(subscriptions.data) > 0
        logger.debug(f"Stripe customer '{customer_id}' active subscription: {active}")
        return active


def get_billing_service() -> AbstractBillingService:
    """Dependency provider for the billing collaborator."""
    return StripeBillingService(settings.stripe_secret_key)
