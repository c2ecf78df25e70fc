# addonkeeper/http/client.py
from __future__ import annotations
import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

__all__ = ["HTTPError", "TransportError", "request"]



class HTTPError(Exception):
    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body[:200]}")
        self.status = status
        self.body = body



class TransportError(Exception):
    """Request never produced a response (DNS, refused connection, TLS, timeout)."""
    def __init__(self, message: str, *, timedOut: bool = False):
        super().__init__(message)
        self.timedOut = timedOut



async def request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    timeoutSeconds: float = 30.0,
    maxConnections: int = 6,
    followRedirects: bool = True
) -> dict[str, Any]:
    """
    Outbound HTTP request, exactly one attempt.

    The pool is created per call and bounded to `maxConnections`; every call
    targets a single URL so this is the per-host bound.

    Returns:
    {
        "status": int,
        "headers": dict[str,str],
        "text": str,
        "content": bytes,
    }

    - Raises HTTPError for any non-2xx final status (after redirects), carrying the body text.
    - Raises TransportError when no response was received (including timeouts).
    """
    if timeoutSeconds <= 0:
        timeoutSeconds = 0.001
    timeout = httpx.Timeout(timeoutSeconds)
    limits = httpx.Limits(
        max_connections=max(1, int(maxConnections)),
        max_keepalive_connections=max(1, int(maxConnections)),
    )
    method = str(method).upper()

    logger.debug("%s %s (timeout=%ss, maxConnections=%s)", method, url, timeoutSeconds, maxConnections)
    try:
        async with httpx.AsyncClient(timeout=timeout, limits=limits, follow_redirects=followRedirects) as cli:
            resp = await cli.request(method, url, headers=headers, params=params)
    except asyncio.CancelledError:
        logger.debug("%s %s cancelled", method, url)
        raise
    except httpx.TimeoutException as err:
        raise TransportError(f"{method} {url} timed out after {timeoutSeconds}s: {err}", timedOut=True) from err
    except (httpx.HTTPError, httpx.InvalidURL) as err:
        # InvalidURL is not an httpx.HTTPError subclass
        raise TransportError(f"{method} {url} failed: {err}") from err

    status = resp.status_code
    if not resp.is_success:
        logger.debug("%s %s → HTTP %d", method, url, status)
        raise HTTPError(status, resp.text)

    logger.debug("%s %s → HTTP %d (%d bytes)", method, url, status, len(resp.content))
    return {
        "status": status,
        "headers": dict(resp.headers), # note: Duplicate header keys are collapsed
        "text": resp.text,
        "content": resp.content,
    }
