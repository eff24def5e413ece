import httpx

from registry_auth.utils.logging import make_logger

logger = make_logger(__name__)

_clients: dict[str, httpx.AsyncClient] = {}


def get_async_client(base_url: str, timeout: float = 5) -> httpx.AsyncClient:
    """Get or create the shared client for *base_url*."""
    base_url = base_url.rstrip("/")
    client = _clients.get(base_url)
    if client is None or client.is_closed:
        client = httpx.AsyncClient(base_url=base_url, timeout=timeout)
        _clients[base_url] = client
    return client


async def close_async_clients() -> None:
    """Close every shared client. Called during app shutdown."""
    for base_url, client in list(_clients.items()):
        await client.aclose()
        logger.info(f"Closed shared httpx client for {base_url}")
    _clients.clear()
