from __future__ import annotations

from typing import Optional, Sequence

from api.app.config import Settings, settings
from common.clients.shopify import ShopifyClient
from .identity import CustomerIdentityCache
from .scope import resolve
from .types import ApiError, Customer, CustomerMatch, NotConfigured, OrderResult, Scope

TEST_EMAIL = "test@example.org"


class OrderLookup:
    """Recent Shopify orders for a helpdesk customer.

    The Shopify customer id is resolved by searching the candidate emails in
    order (first match wins) unless the customer already carries one. A failed
    call ends the lookup with that error; an unknown customer is an empty
    success.
    """

    def __init__(
        self,
        client: ShopifyClient,
        identity: CustomerIdentityCache,
        max_orders: Optional[int] = None,
        config: Optional[Settings] = None,
    ) -> None:
        self.client = client
        self.identity = identity
        self.config = config
        self.max_orders = max_orders or (config or settings).shopify_max_orders

    async def lookup(self, scope: Scope, candidate_emails: Sequence[str], customer: Customer) -> OrderResult:
        credentials = resolve(scope, self.config)
        if isinstance(credentials, NotConfigured):
            return OrderResult()

        emails = [e for e in candidate_emails if e]
        matched_email = emails[0] if emails else None
        shopify_customer_id = self.identity.get(customer)

        if not shopify_customer_id:
            for email in emails:
                found = await self.client.search_customer(credentials, email)
                if isinstance(found, ApiError):
                    return OrderResult(error=found, email=email)
                if isinstance(found, CustomerMatch):
                    shopify_customer_id = found.customer_id
                    matched_email = email
                    break
            else:
                return OrderResult()
            await self.identity.set(customer, shopify_customer_id)

        result = await self.client.list_orders(credentials, shopify_customer_id, limit=self.max_orders)
        if isinstance(result, ApiError):
            return OrderResult(error=result, email=matched_email)
        return OrderResult(orders=result.orders, email=matched_email)

    async def check_credentials(self, scope: Scope) -> Optional[ApiError]:
        """Run a throwaway lookup against the API; returns the error, if any."""
        result = await self.lookup(scope, [TEST_EMAIL], Customer())
        return result.error
