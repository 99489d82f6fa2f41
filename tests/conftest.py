import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv(ROOT / ".env")

from api.app.config import Settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def shop_settings() -> Settings:
    return Settings(
        shopify_shop_domain="mystore.myshopify.com",
        shopify_access_token="shpat_global",
        shopify_api_version="2024-01",
        cache_backend="memory",
    )


@pytest.fixture
def blank_settings() -> Settings:
    return Settings(
        shopify_shop_domain="",
        shopify_access_token="",
        shopify_api_version="",
        cache_backend="memory",
    )
