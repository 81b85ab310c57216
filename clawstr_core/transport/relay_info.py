"""NIP-11 relay information document."""

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

SEARCH_NIP = 50


def http_url(relay_url: str) -> str:
    """Map ws(s):// relay URL to its http(s):// equivalent."""
    if relay_url.startswith("wss://"):
        return "https://" + relay_url[len("wss://"):]
    if relay_url.startswith("ws://"):
        return "http://" + relay_url[len("ws://"):]
    return relay_url


async def fetch_relay_info(
    relay_url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> dict:
    """Fetch the relay's NIP-11 document."""
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient()

    try:
        response = await client.get(
            http_url(relay_url),
            headers={"Accept": "application/nostr+json"},
            timeout=timeout,
        )
        response.raise_for_status()
        return response.json()
    finally:
        if owns_client:
            await client.aclose()


def supports_search(info: dict) -> bool:
    """True if the relay advertises NIP-50 search."""
    nips = info.get("supported_nips") or []
    return SEARCH_NIP in nips
