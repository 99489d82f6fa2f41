from __future__ import annotations

import logging
from typing import Optional

from common.db.dao import CustomerRepository
from .types import Customer

LOG = logging.getLogger(__name__)


class CustomerIdentityCache:
    """Shopify customer id remembered on the helpdesk customer.

    Lets a repeat lookup skip the customer search and go straight to the
    orders endpoint. Entries never expire. Transient customers (no ``id``)
    only keep the value in memory.
    """

    def __init__(self, repo: Optional[CustomerRepository] = None) -> None:
        self.repo = repo

    def get(self, customer: Customer) -> Optional[str]:
        return customer.shopify_customer_id or None

    async def set(self, customer: Customer, shopify_customer_id: str) -> None:
        shopify_customer_id = str(shopify_customer_id)
        if customer.shopify_customer_id == shopify_customer_id:
            return
        customer.shopify_customer_id = shopify_customer_id
        if customer.id is None or self.repo is None:
            return
        await self.repo.save_shopify_customer_id(customer.id, shopify_customer_id)
        LOG.info("Cached Shopify customer %s for customer %s", shopify_customer_id, customer.id)
