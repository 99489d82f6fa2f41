from pydantic import BaseModel
from typing import Any, Literal, Optional, Union


Order = dict[str, Any]


class Credentials(BaseModel):
    shop_domain: str
    access_token: str
    api_version: str


class GlobalScope(BaseModel):
    kind: Literal["global"] = "global"


class TenantScope(BaseModel):
    kind: Literal["tenant"] = "tenant"
    mailbox_id: int
    # raw JSON blob as stored on the mailbox row
    settings: Optional[str] = None


Scope = Union[GlobalScope, TenantScope]


class NotConfigured(BaseModel):
    kind: Literal["not_configured"] = "not_configured"


class NotFound(BaseModel):
    kind: Literal["not_found"] = "not_found"


class ApiError(BaseModel):
    kind: Literal["api_error"] = "api_error"
    status: int
    message: str


class CustomerMatch(BaseModel):
    kind: Literal["customer_match"] = "customer_match"
    customer_id: str


class OrderList(BaseModel):
    kind: Literal["order_list"] = "order_list"
    orders: list[Order] = []


class Customer(BaseModel):
    id: Optional[int] = None
    shopify_customer_id: Optional[str] = None


class Mailbox(BaseModel):
    id: int
    name: Optional[str] = None
    shopify: Optional[str] = None


class OrderResult(BaseModel):
    error: Optional[ApiError] = None
    orders: list[Order] = []
    email: Optional[str] = None


class OrderPanel(BaseModel):
    orders: list[Order]
    customer_emails: list[str]
    load: bool
    url: str
