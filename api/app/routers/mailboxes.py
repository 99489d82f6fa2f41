from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.app.deps import get_mailbox_repository, get_order_lookup
from common.db.dao import MailboxRepository
from common.norm.domains import sanitize_shop_domain
from common.orders.lookup import OrderLookup
from common.orders.scope import is_enabled, mailbox_settings
from common.orders.types import TenantScope

router = APIRouter(prefix="/mailbox/shopify", tags=["mailboxes"])

SETTING_KEYS = ("shop_domain", "access_token", "api_version")


class MailboxSettingsPayload(BaseModel):
    settings: dict[str, str | None] = {}


@router.get("/{mailbox_id}")
async def mailbox_settings_view(mailbox_id: int, mailboxes: MailboxRepository = Depends(get_mailbox_repository)):
    mailbox = await mailboxes.get(mailbox_id)
    if not mailbox:
        raise HTTPException(status_code=404, detail="Mailbox not found")

    values = mailbox_settings(mailbox.shopify)
    return {
        "mailbox_id": mailbox.id,
        "settings": {f"shopify.{key}": values.get(key) or "" for key in SETTING_KEYS},
    }


@router.post("/{mailbox_id}")
async def mailbox_settings_save(
    mailbox_id: int,
    payload: MailboxSettingsPayload,
    mailboxes: MailboxRepository = Depends(get_mailbox_repository),
    lookup: OrderLookup = Depends(get_order_lookup),
):
    mailbox = await mailboxes.get(mailbox_id)
    if not mailbox:
        raise HTTPException(status_code=404, detail="Mailbox not found")

    submitted = {key.removeprefix("shopify."): (value or "").strip() for key, value in payload.settings.items()}
    values = {key: submitted.get(key, "") for key in SETTING_KEYS}
    if values["shop_domain"]:
        values["shop_domain"] = sanitize_shop_domain(values["shop_domain"])

    blob = await mailboxes.save_shopify_settings(mailbox.id, values)

    scope = TenantScope(mailbox_id=mailbox.id, settings=blob)
    if not is_enabled(scope):
        return {"flash_success_floating": "Settings updated"}

    error = await lookup.check_credentials(scope)
    if error:
        return {"flash_error": f"Error occurred connecting to the API: {error.message}"}
    return {"flash_success": "Successfully connected to the API."}
