"""
JSON requests against the ArcGIS sharing REST API.

The portal reports most failures as ``{"error": {"code": ..., "message": ...}}``
with HTTP 200, so the body is inspected as well as the status.
"""
import asyncio
from typing import Any, Dict, Type

import aiohttp
from loguru import logger

from .errors import PortalError


async def get_json(
    http: aiohttp.ClientSession,
    url: str,
    params: Dict[str, Any],
    error_cls: Type[PortalError],
) -> Dict[str, Any]:
    """
    GET a REST resource and return its JSON object.

    Args:
        http: Open aiohttp session
        url: Resource URL
        params: Query parameters (``f=json`` is added)
        error_cls: PortalError subclass raised on any failure

    Raises:
        error_cls: On transport errors, non-200 status, invalid JSON
            or a portal error payload.
    """
    query = {**params, "f": "json"}
    logger.debug(f"GET {url} {params}")
    try:
        async with http.get(url, params=query) as response:
            if response.status != 200:
                raise error_cls(f"HTTP {response.status} from {url}")
            payload = await response.json(content_type=None)
    except asyncio.TimeoutError as e:
        raise error_cls(f"Timed out requesting {url}") from e
    except aiohttp.ClientError as e:
        raise error_cls(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise error_cls(f"Invalid JSON from {url}") from e

    if not isinstance(payload, dict):
        raise error_cls(f"Unexpected response from {url}")

    error = payload.get("error")
    if error and not isinstance(error, dict):
        raise error_cls(str(error))
    if error:
        message = error.get("message") or f"Portal error {error.get('code')}"
        details = error.get("details") or []
        if details:
            message = f"{message} ({'; '.join(str(d) for d in details)})"
        raise error_cls(message)

    return payload
