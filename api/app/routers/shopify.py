from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.app.deps import get_customer_repository, get_mailbox_repository, get_order_lookup
from common.cache.results import ResultCache, get_result_cache
from common.db.dao import CustomerRepository, MailboxRepository
from common.orders.lookup import OrderLookup
from common.orders.scope import is_enabled, scope_for_mailbox, shop_url
from common.orders.types import Customer, GlobalScope


router = APIRouter(prefix="/shopify", tags=["shopify"])


class AjaxPayload(BaseModel):
    action: str
    mailbox_id: int | None = None
    customer_emails: list[str] = []


@router.post("/ajax")
async def ajax(
    payload: AjaxPayload,
    lookup: OrderLookup = Depends(get_order_lookup),
    customers: CustomerRepository = Depends(get_customer_repository),
    mailboxes: MailboxRepository = Depends(get_mailbox_repository),
    cache: ResultCache = Depends(get_result_cache),
):
    response = {"status": "error", "msg": ""}

    if payload.action == "orders":
        mailbox = await mailboxes.get(payload.mailbox_id) if payload.mailbox_id else None
        scope = scope_for_mailbox(mailbox)
        emails = [e for e in payload.customer_emails if e]
        orders = []

        if emails and is_enabled(scope):
            customer = await customers.find_by_emails(emails) or Customer()
            result = await lookup.lookup(scope, emails, customer)
            if result.error:
                response["msg"] = result.error.message
            elif result.orders:
                orders = result.orders
                await cache.put(scope, result.email, orders)

        response.update(status="success", orders=orders, load=False, url=shop_url(scope))
    else:
        response["msg"] = "Unknown action"

    if response["status"] == "error" and not response["msg"]:
        response["msg"] = "Unknown error occured"

    return response


@router.post("/settings/test")
async def test_global_settings(lookup: OrderLookup = Depends(get_order_lookup)):
    scope = GlobalScope()
    if not is_enabled(scope):
        return {"flash_error": "Shopify API is not configured"}

    error = await lookup.check_credentials(scope)
    if error:
        return {"flash_error": f"Error occurred connecting to the API: {error.message}"}
    return {"flash_success": "Successfully connected to the API."}
