"""Resilient HTTP Client — wraps httpx.AsyncClient with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): max_retries retries with exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to ProviderAPIError (core/errors.py)

Design Decisions:
    - One wrapper shared by both provider adapters: retry policy lives in one place
    - ±25% jitter on backoff: spreads retries on a shared rate limit
    - error_prefix lets each adapter keep its own user-facing error wording
"""

import asyncio
import logging
import random
from typing import Any

import httpx

from lucid.core.errors import ProviderAPIError, ErrorContext

logger = logging.getLogger(__name__)

_RATE_LIMIT_STATUS = 429


class ResilientHttpClient:
    """POSTs JSON with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 60_000,
        timeout_seconds: int = 120,
    ):
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def aclose(self) -> None:
        await self.client.aclose()

    async def post_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        payload: dict,
        error_prefix: str,
        context: ErrorContext | None = None,
    ) -> Any:
        """POST payload and return the decoded JSON value, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.post(url, headers=headers, json=payload)
            except httpx.TimeoutException:
                raise ProviderAPIError(
                    f"{error_prefix}: timeout", "timeout", context=context,
                )
            except httpx.TransportError as e:
                await self._handle_transient_error(e, attempt, error_prefix, context)
                continue

            if response.status_code == _RATE_LIMIT_STATUS:
                await self._handle_rate_limit(response, attempt, error_prefix, context)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    _status_message(response), attempt, error_prefix, context,
                )
                continue
            if response.is_error:
                raise ProviderAPIError(
                    f"{error_prefix}: {_status_message(response)}",
                    "client_error", context=context,
                )

            self._log_success(response, attempt, context)
            try:
                return response.json()
            except ValueError:
                raise ProviderAPIError(
                    f"{error_prefix}: response body is not JSON",
                    "invalid_response", context=context,
                )
        # Unreachable: the last attempt always raises from a handler
        raise ProviderAPIError(f"{error_prefix}: retries exhausted", "unknown", context=context)

    def _log_success(
        self, response: httpx.Response, attempt: int, context: ErrorContext | None,
    ) -> None:
        logger.info(
            "Provider API success",
            extra={
                "attempt": attempt + 1,
                "status_code": response.status_code,
                "provider": context.provider if context else None,
            },
        )

    async def _handle_rate_limit(
        self,
        response: httpx.Response,
        attempt: int,
        error_prefix: str,
        context: ErrorContext | None,
    ) -> None:
        """Handle rate limit response with retry or raise."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise ProviderAPIError(
                f"{error_prefix}: rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self,
        e: object,
        attempt: int,
        error_prefix: str,
        context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise ProviderAPIError(
                f"{error_prefix}: transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.strip().isdigit():
            return int(val) * 1000
        return None


def _status_message(response: httpx.Response) -> str:
    return f"{response.status_code} - {response.text}"
