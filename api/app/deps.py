from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.app.db import get_db
from common.cache.results import ResultCache, get_result_cache
from common.clients.shopify import ShopifyClient
from common.db.dao import CustomerRepository, MailboxRepository
from common.orders.identity import CustomerIdentityCache
from common.orders.lookup import OrderLookup
from common.orders.panel import OrderPanelProvider


def get_shopify_client() -> ShopifyClient:
    return ShopifyClient()


def get_customer_repository(db: AsyncSession = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)


def get_mailbox_repository(db: AsyncSession = Depends(get_db)) -> MailboxRepository:
    return MailboxRepository(db)


def get_order_lookup(
    client: ShopifyClient = Depends(get_shopify_client),
    customers: CustomerRepository = Depends(get_customer_repository),
) -> OrderLookup:
    return OrderLookup(client, CustomerIdentityCache(customers))


def get_order_panel_provider(cache: ResultCache = Depends(get_result_cache)) -> OrderPanelProvider:
    return OrderPanelProvider(cache)
