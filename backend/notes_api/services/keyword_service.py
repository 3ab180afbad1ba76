"""
Notes API — Keyword Proxy Service
===================================

What:  Forwards a keyword to the remote keyword-echo function and hands back
       its HTTP response untouched.
Why:   The function runs on a serverless platform; clients call it through us.
How:   httpx AsyncClient GET <KEYWORD_FUNCTION_URL>?keyword=<keyword>, with
       tenacity retrying transport-level failures (connect errors, timeouts).
       HTTP error statuses from the remote are NOT retried; they are relayed.

Remote contract:
    GET ?keyword=hello  →  200 {"message": "<someone> says hello"}
"""

import logging
from typing import Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

from notes_api.config import settings
from notes_api.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class KeywordProxyService:
    """
    Thin client for the remote keyword function.

    Args:
        base_url: Remote endpoint (default: KEYWORD_FUNCTION_URL)
        timeout: Seconds for the whole call (default: PROXY_TIMEOUT)
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.keyword_function_url
        self.timeout = timeout or settings.proxy_timeout
        self._transport = transport

    async def say(self, keyword: str) -> httpx.Response:
        """
        Call the remote function with `keyword` and return its response.

        Raises:
            UpstreamServiceError: The remote could not be reached after retries
        """
        try:
            response = await self._call_with_retry(keyword)
        except httpx.HTTPError as e:
            logger.error(
                "Keyword function unreachable at %s: %s (%s)",
                self.base_url,
                str(e),
                type(e).__name__,
            )
            raise UpstreamServiceError(
                context={"url": self.base_url, "error_type": type(e).__name__},
            )

        logger.info("Keyword function answered %d", response.status_code)
        return response

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=settings.retry_jitter,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_with_retry(self, keyword: str) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self.timeout,
        ) as client:
            return await client.get(self.base_url, params={"keyword": keyword})


# ── Singleton Instance ────────────────────────────────────────────────────
keyword_service = KeywordProxyService()
