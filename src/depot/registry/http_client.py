"""Shared async HTTP client utilities for the registry and archive fetches.

Provides a thin layer over ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error mapping, so that the registry
client and the install pipeline see Depot exceptions rather than raw
``httpx`` ones.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from depot import __version__
from depot.exceptions import InvalidSourceError, RegistryError

logger = logging.getLogger(__name__)

# Timeout for all HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"depot/{__version__}"

# Streaming chunk size for archive downloads.
CHUNK_SIZE: int = 64 * 1024


def create_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the client shared by one install session.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional transport override (tests use
            ``httpx.MockTransport``).
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


async def get_json(client: httpx.AsyncClient, url: str) -> tuple[int, Any]:
    """GET *url* and decode the body as JSON when the status is 200.

    Args:
        client: The session client.
        url: Absolute URL.

    Returns:
        ``(status_code, document)``; ``document`` is None for non-200
        responses so callers can map statuses to their own errors.

    Raises:
        RegistryError: On timeouts, transport errors, or invalid JSON.
    """
    try:
        resp = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise RegistryError(f"Timeout fetching {url}", url=url) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise RegistryError(f"Request error for {url}: {exc}", url=url) from exc

    if resp.status_code != 200:
        logger.debug("HTTP %d from %s", resp.status_code, url)
        return resp.status_code, None
    try:
        return resp.status_code, resp.json()
    except ValueError as exc:
        raise RegistryError(
            f"Invalid JSON from {url}", url=url, status_code=resp.status_code
        ) from exc


async def download(client: httpx.AsyncClient, url: str, destination: Path) -> Path:
    """Stream *url* into the file *destination*.

    The parent directory is created if needed. A partially written file is
    removed on failure.

    Returns:
        The path of the downloaded file.

    Raises:
        InvalidSourceError: On a non-200 status or any transport error.
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        async with client.stream("GET", url) as resp:
            if resp.status_code != 200:
                raise InvalidSourceError(url, f"HTTP {resp.status_code}")
            with destination.open("wb") as fh:
                async for chunk in resp.aiter_bytes(CHUNK_SIZE):
                    fh.write(chunk)
    except httpx.HTTPError as exc:
        destination.unlink(missing_ok=True)
        logger.warning("Failed to download %s: %s", url, exc)
        raise InvalidSourceError(url, str(exc)) from exc
    except InvalidSourceError:
        destination.unlink(missing_ok=True)
        raise
    return destination
