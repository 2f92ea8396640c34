from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

import httpx

from planner_ai.errors import (
    EmptyResponseError,
    UpstreamError,
    classify_upstream_error,
    timeout_error,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_timeout(call: Awaitable[T], timeout_s: float, provider: str) -> T:
    """Await ``call`` for at most ``timeout_s`` seconds.

    On expiry the call is cancelled, which closes its HTTP connection, and a
    ProviderTimeoutError is raised in its place.
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.warning(f"{provider} did not answer within {timeout_s}s, request cancelled")
        raise timeout_error(provider) from None


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err

    return response.text.strip() or response.reason_phrase


async def post_json(
    url: str,
    *,
    headers: dict,
    payload: dict,
    provider: str,
    timeout_s: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """POST ``payload`` and return the decoded JSON body.

    Failures are raised as PlannerError subclasses, never as httpx errors.
    """
    # httpx applies timeout_s per phase (connect, write, each read), not to the
    # whole exchange. The end-to-end deadline is run_with_timeout around the caller.
    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            r = await client.post(url, headers=headers, json=payload)
    except httpx.TimeoutException:
        raise timeout_error(provider) from None
    except httpx.HTTPError as e:
        logger.error(f"Error calling {provider} API: {e}")
        raise UpstreamError(
            f"Failed to connect to {provider}",
            str(e) or "Please check your internet connection and try again.",
        ) from e

    if r.is_error:
        message = _error_message(r)
        logger.error(f"{provider} API error ({r.status_code}): {message}")
        raise classify_upstream_error(provider, r.status_code, message)

    try:
        return r.json()
    except ValueError:
        raise EmptyResponseError(
            f"Received empty response from {provider}",
            "The response body was not valid JSON",
        ) from None
