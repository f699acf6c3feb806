from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Optional

import httpx

from .constants import DISCORD_API_BASE_URL
from .errors import PermanentTransportError, TransientTransportError, TransportError
from .responses import Route, interaction_callback_route

logger = logging.getLogger(__name__)


class InteractionRestClient:
    """``RequestExecutor`` backed by ``httpx``.

    Rate limits (429) are retried after ``Retry-After``; server errors and
    network failures are retried with exponential backoff and jitter.
    """

    def __init__(
        self,
        *,
        bot_token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        base_url: str = DISCORD_API_BASE_URL,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        retry_max_delay: float = 30.0,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout_seconds)
        # Interaction callbacks are authorized by the token in the path.
        self._headers: dict[str, str] = {}
        if bot_token:
            self._headers["Authorization"] = f"Bot {bot_token}"
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._retry_max_delay = retry_max_delay

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "InteractionRestClient":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    def _calculate_retry_delay(self, attempt: int) -> float:
        delay = self._retry_base_delay * (2**attempt) + random.uniform(0, 1)
        return float(min(delay, self._retry_max_delay))

    def _is_retryable_error(self, exc: Exception) -> bool:
        return isinstance(
            exc,
            (
                httpx.ConnectError,
                httpx.ReadError,
                httpx.WriteError,
                httpx.ConnectTimeout,
                httpx.ReadTimeout,
                httpx.WriteTimeout,
            ),
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        rate_limit_retries = 0
        retry_attempt = 0

        while True:
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=payload,
                    headers=self._headers,
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                if status_code == 429:
                    retry_after_raw = exc.response.headers.get("Retry-After")
                    if (
                        retry_after_raw is not None
                        and rate_limit_retries < self._max_retries
                    ):
                        rate_limit_retries += 1
                        try:
                            retry_after = max(float(retry_after_raw), 0.0)
                        except ValueError:
                            retry_after = 0.0
                        logger.info(
                            "Rate limited on %s %s, retrying after %.1fs (attempt %d)",
                            method,
                            path,
                            retry_after,
                            rate_limit_retries,
                        )
                        await asyncio.sleep(retry_after)
                        continue
                    raise TransientTransportError(
                        f"Rate limit exceeded for {method} {path}",
                        status_code=status_code,
                        retry_after=_parse_retry_after(retry_after_raw),
                    ) from exc

                body_preview = (
                    (exc.response.text or "").strip().replace("\n", " ")[:200]
                )
                if 500 <= status_code < 600:
                    if retry_attempt < self._max_retries:
                        retry_attempt += 1
                        delay = self._calculate_retry_delay(retry_attempt)
                        logger.warning(
                            "Server error %d on %s %s, retrying in %.1fs (attempt %d/%d)",
                            status_code,
                            method,
                            path,
                            delay,
                            retry_attempt,
                            self._max_retries,
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise TransientTransportError(
                        f"Server error for {method} {path}: "
                        f"status={status_code} body={body_preview!r}",
                        status_code=status_code,
                    ) from exc
                if status_code in {401, 403}:
                    raise PermanentTransportError(
                        f"Authentication failure for {method} {path}: "
                        f"status={status_code} body={body_preview!r}",
                        status_code=status_code,
                    ) from exc
                raise PermanentTransportError(
                    f"Request rejected for {method} {path}: "
                    f"status={status_code} body={body_preview!r}",
                    status_code=status_code,
                ) from exc
            except httpx.HTTPError as exc:
                if self._is_retryable_error(exc) and retry_attempt < self._max_retries:
                    retry_attempt += 1
                    delay = self._calculate_retry_delay(retry_attempt)
                    logger.warning(
                        "Network error on %s %s: %s, retrying in %.1fs (attempt %d/%d)",
                        method,
                        path,
                        type(exc).__name__,
                        delay,
                        retry_attempt,
                        self._max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                if self._is_retryable_error(exc):
                    raise TransientTransportError(
                        f"Network error for {method} {path}: {exc}"
                    ) from exc
                raise TransportError(f"Network error for {method} {path}: {exc}") from exc

            return response

    async def submit(self, route: Route, body: dict[str, Any]) -> None:
        await self._request(route.method, route.path, payload=body)

    async def create_interaction_response(
        self,
        *,
        interaction_id: str,
        interaction_token: str,
        payload: dict[str, Any],
    ) -> None:
        await self.submit(
            interaction_callback_route(interaction_id, interaction_token), payload
        )


def _parse_retry_after(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return None
