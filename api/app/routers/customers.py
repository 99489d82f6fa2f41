from fastapi import APIRouter, Depends, HTTPException

from api.app.deps import get_customer_repository, get_mailbox_repository, get_order_panel_provider
from common.db.dao import CustomerRepository, MailboxRepository
from common.orders.panel import OrderPanelProvider

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/{customer_id}/orders-panel")
async def orders_panel(
    customer_id: int,
    mailbox_id: int | None = None,
    customers: CustomerRepository = Depends(get_customer_repository),
    mailboxes: MailboxRepository = Depends(get_mailbox_repository),
    provider: OrderPanelProvider = Depends(get_order_panel_provider),
):
    customer = await customers.get(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    emails = await customers.list_emails(customer_id)
    mailbox = await mailboxes.get(mailbox_id) if mailbox_id else None
    panel = await provider.build(emails, mailbox)
    return panel.model_dump() if panel else None
