from __future__ import annotations

import logging
from typing import Optional, Sequence

from api.app.config import Settings
from common.cache.results import ResultCache
from .scope import is_enabled, scope_for_mailbox, shop_url
from .types import Mailbox, OrderPanel

LOG = logging.getLogger(__name__)


class OrderPanelProvider:
    """Builds the "Recent Orders" sidebar model for a conversation.

    Served straight from the result cache. On a miss the panel comes back
    with ``load=True`` and the display surface fetches orders through the
    ajax endpoint, which fills the cache for the next view.
    """

    def __init__(self, cache: ResultCache, config: Optional[Settings] = None) -> None:
        self.cache = cache
        self.config = config

    async def build(self, customer_emails: Sequence[str], mailbox: Optional[Mailbox]) -> Optional[OrderPanel]:
        emails = [e for e in customer_emails if e]
        if not emails:
            return None

        scope = scope_for_mailbox(mailbox)
        if not is_enabled(scope, self.config):
            LOG.debug("Shopify API not enabled, skipping orders panel")
            return None

        orders = []
        load = True
        for email in emails:
            cached = await self.cache.get(scope, email)
            if cached is not None:
                orders = cached
                load = False
                break

        return OrderPanel(
            orders=orders,
            customer_emails=emails,
            load=load,
            url=shop_url(scope, self.config),
        )
