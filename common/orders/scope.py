from __future__ import annotations

import json
from typing import Any, Dict, Optional

from api.app.config import Settings, settings
from common.norm.domains import normalize_shop_url
from .types import Credentials, GlobalScope, Mailbox, NotConfigured, Scope, TenantScope


def mailbox_settings(blob: Optional[str]) -> Dict[str, Any]:
    """Decode a mailbox's shopify settings blob; anything unusable reads as empty."""
    if not blob:
        return {}
    try:
        data = json.loads(blob)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _credentials(shop_domain: Any, access_token: Any, api_version: Any) -> Credentials | NotConfigured:
    fields = [str(v) if v is not None else "" for v in (shop_domain, access_token, api_version)]
    if not all(fields):
        return NotConfigured()
    return Credentials(shop_domain=fields[0], access_token=fields[1], api_version=fields[2])


def resolve(scope: Scope, config: Optional[Settings] = None) -> Credentials | NotConfigured:
    if isinstance(scope, TenantScope):
        values = mailbox_settings(scope.settings)
        return _credentials(values.get("shop_domain"), values.get("access_token"), values.get("api_version"))

    config = config or settings
    return _credentials(
        config.shopify_shop_domain,
        config.shopify_access_token,
        config.shopify_api_version,
    )


def is_enabled(scope: Scope, config: Optional[Settings] = None) -> bool:
    return isinstance(resolve(scope, config), Credentials)


def scope_for_mailbox(mailbox: Optional[Mailbox]) -> Scope:
    if mailbox is not None:
        scope = TenantScope(mailbox_id=mailbox.id, settings=mailbox.shopify)
        if is_enabled(scope):
            return scope
    return GlobalScope()


def shop_url(scope: Scope, config: Optional[Settings] = None) -> str:
    config = config or settings
    domain = ""
    if isinstance(scope, TenantScope):
        domain = str(mailbox_settings(scope.settings).get("shop_domain") or "")
    return normalize_shop_url(domain or config.shopify_shop_domain)
