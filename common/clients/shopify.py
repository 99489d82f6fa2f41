import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote_plus

import httpx
from prometheus_client import Counter

from api.app.config import settings
from common.norm.domains import normalize_shop_url
from common.orders.types import ApiError, Credentials, CustomerMatch, NotFound, OrderList

LOG = logging.getLogger(__name__)

MAX_ORDERS = 5

_api_errors = Counter("shopdesk_shopify_api_errors_total", "Shopify API failures", ["endpoint"])


def error_code_descr(code: int) -> str:
    if code == 400:
        return "Bad request"
    if code in (401, 403):
        return "Authentication error. Check your Admin API access token and ensure it has the correct permissions."
    if code in (0, 404):
        return "Shop not found. Verify your shop domain is correct (e.g., mystore.myshopify.com)"
    if code == 429:
        return "Shopify API rate limit exceeded. Please try again in a moment."
    if code == 500:
        return "Internal shop error"
    return "Unknown error"


def _api_base(credentials: Credentials) -> str:
    return f"{normalize_shop_url(credentials.shop_domain)}/admin/api/{credentials.api_version}"


class ShopifyClient:
    def __init__(
        self,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = httpx.Timeout(
            timeout if timeout is not None else settings.http_timeout,
            connect=connect_timeout if connect_timeout is not None else settings.http_connect_timeout,
        )
        self.user_agent = user_agent or settings.shopify_user_agent
        self.transport = transport

    def _fail(self, endpoint: str, url: str, status: int, message: str) -> ApiError:
        message = f"{message} | Requested resource: {url}"
        LOG.error("[Shopify] API Error: %s", message)
        _api_errors.labels(endpoint=endpoint).inc()
        return ApiError(status=status, message=message)

    async def _get_json(self, endpoint: str, url: str, access_token: str) -> Dict[str, Any] | ApiError:
        headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                resp = await client.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return self._fail(endpoint, url, 0, str(exc) or exc.__class__.__name__)

        LOG.info("[Shopify] API Response - Status: %s, URL: %s", resp.status_code, url)

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code == 200:
            if body is None:
                return self._fail(endpoint, url, 200, "Invalid JSON in API response")
            return body if isinstance(body, dict) else {}

        message = f"HTTP Status Code: {resp.status_code} ({error_code_descr(resp.status_code)})"
        if isinstance(body, dict) and body.get("errors"):
            message += " | API Error: " + json.dumps(body["errors"])
        return self._fail(endpoint, url, resp.status_code, message)

    async def search_customer(self, credentials: Credentials, email: str) -> CustomerMatch | NotFound | ApiError:
        url = f"{_api_base(credentials)}/customers/search.json?query=email:{quote_plus(email)}"
        data = await self._get_json("customers_search", url, credentials.access_token)
        if isinstance(data, ApiError):
            return data

        customers = data.get("customers") or []
        first = customers[0] if isinstance(customers, list) and customers else None
        if not isinstance(first, dict) or not first.get("id"):
            return NotFound()
        return CustomerMatch(customer_id=str(first["id"]))

    async def list_orders(
        self, credentials: Credentials, customer_id: str, limit: int = MAX_ORDERS
    ) -> OrderList | ApiError:
        url = f"{_api_base(credentials)}/customers/{customer_id}/orders.json?status=any&limit={limit}"
        data = await self._get_json("customer_orders", url, credentials.access_token)
        if isinstance(data, ApiError):
            return data

        orders = data.get("orders") or []
        return OrderList(orders=orders if isinstance(orders, list) else [])
