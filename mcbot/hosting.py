"""Best-effort guess of who hosts a server, from its hostname and IP."""

import logging
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from .config import HOSTING_BRANDS, IP_PREFIX_PROVIDERS

logger = logging.getLogger(__name__)

Table = Sequence[Tuple[str, str]]


def match_brand(hostname: str, brands: Table = HOSTING_BRANDS) -> Optional[str]:
    lowered = hostname.lower()
    for needle, label in brands:
        if needle in lowered:
            return label
    return None


def match_ip_prefix(ip: str, ip_prefixes: Table = IP_PREFIX_PROVIDERS) -> Optional[str]:
    for prefix, label in ip_prefixes:
        if ip.startswith(prefix):
            return label
    return None


def classify_host(
    hostname: str,
    ip: str,
    brands: Table = HOSTING_BRANDS,
    ip_prefixes: Table = IP_PREFIX_PROVIDERS,
) -> str:
    """Brand from the hostname, else provider from the IP prefix, else the IP itself."""
    return match_brand(hostname, brands) or match_ip_prefix(ip, ip_prefixes) or ip


async def guess_hosting(
    hostname: str,
    lookup: Callable[[str], Awaitable[str]],
    record_host: Optional[str] = None,
    brands: Table = HOSTING_BRANDS,
    ip_prefixes: Table = IP_PREFIX_PROVIDERS,
) -> str:
    """Never raises; a failed lookup degrades to `record_host` or "Unknown"."""
    brand = match_brand(hostname, brands)
    if brand:
        return brand

    try:
        ip = await lookup(hostname)
    except Exception as e:
        logger.warning(f"Hosting lookup for {hostname} failed: {e}")
        return record_host or "Unknown"

    return classify_host(hostname, ip, brands, ip_prefixes)
