import ipaddress
import re

import httpx

_PROTOCOL_RE = re.compile(r"https?://", re.IGNORECASE)
_LOCAL_HOSTS = {"localhost", "localhost.localdomain"}


def strip_protocol(domain: str | None) -> str:
    return _PROTOCOL_RE.sub("", (domain or "").strip())


def normalize_shop_url(domain: str | None) -> str:
    """Absolute https URL for a stored shop domain, e.g. ``https://mystore.myshopify.com``."""
    return "https://" + strip_protocol(domain).rstrip("/")


def _is_remote_host(host: str) -> bool:
    if not host or host.lower() in _LOCAL_HOSTS or host.lower().endswith(".localhost"):
        return False
    try:
        ip = ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return "." in host
    return ip.is_global


def sanitize_shop_domain(domain: str | None) -> str:
    """Strip the protocol and drop the value entirely unless it points to a remote host."""
    cleaned = strip_protocol(domain)
    if not cleaned:
        return ""
    try:
        host = httpx.URL("https://" + cleaned).host
    except httpx.InvalidURL:
        return ""
    if not _is_remote_host(host):
        return ""
    return cleaned
