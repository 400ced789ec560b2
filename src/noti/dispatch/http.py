from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from noti.errors import DispatchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_RETRIES = 2

_RETRYABLE_HTTP_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientConnectorError,
    aiohttp.ClientOSError,
    aiohttp.ServerDisconnectedError,
    asyncio.TimeoutError,
    ConnectionResetError,
)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


async def _post_once(
    session: aiohttp.ClientSession,
    url: str,
    *,
    json: Optional[Mapping[str, Any]],
    data: Optional[Mapping[str, str]],
    headers: Optional[Mapping[str, str]],
) -> HttpResponse:
    async with session.post(url, json=json, data=data, headers=headers) as response:
        return HttpResponse(status=response.status, text=await response.text())


async def post(
    url: str,
    *,
    service: str,
    json: Optional[Mapping[str, Any]] = None,
    data: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> HttpResponse:
    """
    POST a request, retrying transient connection errors.

    Non-2xx responses raise DispatchError without retrying.
    """
    last_error: BaseException | None = None
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        for attempt in range(1, max_retries + 1):
            try:
                response = await _post_once(session, url, json=json, data=data, headers=headers)
            except _RETRYABLE_HTTP_ERRORS as exc:
                last_error = exc
                if attempt >= max_retries:
                    break
                delay_seconds = 0.5 * (2 ** (attempt - 1))
                logger.warning(
                    "Retrying notification request. service=%s attempt=%s/%s delay_seconds=%s error=%s",
                    service,
                    attempt,
                    max_retries,
                    delay_seconds,
                    type(exc).__name__,
                )
                await asyncio.sleep(delay_seconds)
                continue
            except aiohttp.ClientError as exc:
                raise DispatchError(f"Request failed: {exc}", service=service) from exc

            if not response.ok:
                raise DispatchError(
                    f"Unexpected response status {response.status}: {response.text[:200]}",
                    service=service,
                )
            return response

    raise DispatchError(
        f"Request failed after retries. error={type(last_error).__name__ if last_error else 'unknown'}",
        service=service,
    )
