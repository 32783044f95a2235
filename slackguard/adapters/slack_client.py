"""Slack Web API client used to read workspace state."""

import asyncio
from typing import Any, Dict, List, Optional, Set

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import get_settings
from ..errors import SlackAPIError
from ..logging import get_logger, log_api_call

logger = get_logger(__name__)


class SlackWebClient:
    """Read-only Slack Web API client.

    Slack reports failures in its response envelope (``ok: false`` plus an
    ``error`` string) rather than through HTTP status codes, so ``call``
    raises :class:`SlackAPIError` for such responses. Transport failures are
    retried and then re-raised unchanged.
    """

    def __init__(
        self,
        access_token: str,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the Slack client."""
        settings = get_settings()
        self._access_token = access_token
        self._base_url = (base_url or settings.slack_api_base_url).rstrip('/')
        self._timeout = timeout if timeout is not None else settings.http_timeout

    @retry(
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True
    )
    async def call(self, method: str, **params: Any) -> Dict[str, Any]:
        """Call a Web API method and return the parsed response body."""
        url = f"{self._base_url}/{method}"
        query = {key: str(value) for key, value in params.items() if value is not None}
        headers = {"Authorization": f"Bearer {self._access_token}"}

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as session:
                async with session.get(url, params=query, headers=headers) as response:
                    response.raise_for_status()
                    data = await response.json(content_type=None)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(
                "Slack API request failed",
                api_method=method,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        if not isinstance(data, dict):
            log_api_call(logger, method, ok=False, params=query, error="invalid_response")
            raise SlackAPIError(method, "invalid_response")

        ok = bool(data.get("ok"))
        log_api_call(logger, method, ok=ok, params=query, error=data.get("error"))

        if not ok:
            raise SlackAPIError(method, data.get("error"))

        return data

    async def paginate(
        self,
        method: str,
        key: str,
        *,
        limit: Optional[int] = None,
        **params: Any,
    ) -> List[Dict[str, Any]]:
        """Collect ``key`` from every page of a cursor-paginated method."""
        items: List[Dict[str, Any]] = []
        cursor: Optional[str] = None
        seen: Set[str] = set()

        while True:
            data = await self.call(method, limit=limit, cursor=cursor, **params)
            items.extend(data.get(key) or [])

            cursor = (data.get("response_metadata") or {}).get("next_cursor") or None
            if not cursor:
                break
            if cursor in seen:
                logger.warning("Pagination cursor repeated", api_method=method, cursor=cursor)
                break
            seen.add(cursor)

        logger.debug("Pagination completed", api_method=method, items=len(items))
        return items
