import json

import pytest

from common.orders import scope as scope_mod
from common.orders.scope import is_enabled, mailbox_settings, resolve, scope_for_mailbox, shop_url
from common.orders.types import Credentials, GlobalScope, Mailbox, NotConfigured, TenantScope


def _blob(**values) -> str:
    base = {"shop_domain": "tenant.myshopify.com", "access_token": "shpat_tenant", "api_version": "2024-04"}
    base.update(values)
    return json.dumps(base)


def test_global_scope_resolves_from_settings(shop_settings):
    creds = resolve(GlobalScope(), shop_settings)

    assert creds == Credentials(
        shop_domain="mystore.myshopify.com",
        access_token="shpat_global",
        api_version="2024-01",
    )
    assert is_enabled(GlobalScope(), shop_settings)


@pytest.mark.parametrize("missing", ["shopify_shop_domain", "shopify_access_token", "shopify_api_version"])
def test_global_scope_disabled_when_any_field_empty(shop_settings, missing):
    config = shop_settings.model_copy(update={missing: ""})

    assert isinstance(resolve(GlobalScope(), config), NotConfigured)
    assert not is_enabled(GlobalScope(), config)


def test_tenant_scope_reads_blob(blank_settings):
    scope = TenantScope(mailbox_id=3, settings=_blob())

    creds = resolve(scope, blank_settings)

    assert creds.shop_domain == "tenant.myshopify.com"
    assert creds.api_version == "2024-04"


@pytest.mark.parametrize("blob", [None, "", "{not json", "[]", _blob(access_token=""), _blob(api_version=None)])
def test_tenant_scope_not_configured(shop_settings, blob):
    scope = TenantScope(mailbox_id=3, settings=blob)

    assert isinstance(resolve(scope, shop_settings), NotConfigured)
    assert not is_enabled(scope, shop_settings)


def test_mailbox_settings_tolerates_garbage():
    assert mailbox_settings(None) == {}
    assert mailbox_settings("nope") == {}
    assert mailbox_settings('{"shop_domain": "a"}') == {"shop_domain": "a"}


def test_scope_for_mailbox_prefers_enabled_tenant():
    assert scope_for_mailbox(None) == GlobalScope()
    assert scope_for_mailbox(Mailbox(id=1, shopify=None)) == GlobalScope()
    assert scope_for_mailbox(Mailbox(id=1, shopify=_blob(shop_domain=""))) == GlobalScope()

    scope = scope_for_mailbox(Mailbox(id=1, shopify=_blob()))
    assert isinstance(scope, TenantScope)
    assert scope.mailbox_id == 1


def test_shop_url(monkeypatch, shop_settings):
    monkeypatch.setattr(scope_mod, "settings", shop_settings)

    assert shop_url(GlobalScope()) == "https://mystore.myshopify.com"
    assert shop_url(TenantScope(mailbox_id=1, settings=_blob(shop_domain="https://tenant.myshopify.com/"))) == (
        "https://tenant.myshopify.com"
    )
    assert shop_url(TenantScope(mailbox_id=1, settings=None)) == "https://mystore.myshopify.com"


def test_whitespace_values_count_as_set(blank_settings):
    scope = TenantScope(mailbox_id=3, settings=_blob(access_token=" ", api_version=" "))

    creds = resolve(scope, blank_settings)

    assert isinstance(creds, Credentials)
    assert creds.access_token == " "
    assert is_enabled(scope, blank_settings)
