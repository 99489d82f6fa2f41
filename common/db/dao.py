from __future__ import annotations
from typing import List, Dict, Optional, Any, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

import json

from common.orders.types import Customer, Mailbox


class CustomerRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, customer_id: int) -> Optional[Customer]:
        row = (
            await self.session.execute(
                text("select id, shopify_customer_id from customers where id = :id"),
                {"id": customer_id},
            )
        ).first()
        if not row:
            return None
        return Customer(id=row.id, shopify_customer_id=row.shopify_customer_id)

    async def find_by_email(self, email: str) -> Optional[Customer]:
        row = (
            await self.session.execute(
                text(
                    """
                    select c.id, c.shopify_customer_id
                    from emails e
                    join customers c on c.id = e.customer_id
                    where e.email = :email
                    limit 1
                    """
                ),
                {"email": email},
            )
        ).first()
        if not row:
            return None
        return Customer(id=row.id, shopify_customer_id=row.shopify_customer_id)

    async def find_by_emails(self, emails: Sequence[str]) -> Optional[Customer]:
        for email in emails:
            customer = await self.find_by_email(email)
            if customer:
                return customer
        return None

    async def list_emails(self, customer_id: int) -> List[str]:
        result = await self.session.execute(
            text("select email from emails where customer_id = :cid order by id"),
            {"cid": customer_id},
        )
        return [row.email for row in result.fetchall()]

    async def save_shopify_customer_id(self, customer_id: int, shopify_customer_id: str) -> None:
        await self.session.execute(
            text("update customers set shopify_customer_id = :sid where id = :id"),
            {"sid": shopify_customer_id, "id": customer_id},
        )
        await self.session.commit()


class MailboxRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, mailbox_id: int) -> Optional[Mailbox]:
        row = (
            await self.session.execute(
                text("select id, name, shopify from mailboxes where id = :id"),
                {"id": mailbox_id},
            )
        ).first()
        if not row:
            return None
        return Mailbox(id=row.id, name=row.name, shopify=row.shopify)

    async def save_shopify_settings(self, mailbox_id: int, values: Dict[str, Any]) -> str:
        blob = json.dumps(values)
        await self.session.execute(
            text("update mailboxes set shopify = :shopify where id = :id"),
            {"shopify": blob, "id": mailbox_id},
        )
        await self.session.commit()
        return blob
