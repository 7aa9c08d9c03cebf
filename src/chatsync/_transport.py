"""JSON-over-HTTP transport for the chat backend."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from chatsync._constants import USER_AGENT
from chatsync._redact import redact_for_log
from chatsync.config import ChatSyncConfig
from chatsync.exceptions import ChatSyncParseError, ChatSyncTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by :class:`~chatsync.remote.RemoteSyncClient`.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(self, method: str, endpoint: str, *, json_body: Any = None) -> Any:
        ...


class HttpTransport:
    """HTTP transport that sends and receives JSON bodies.

    Raises :class:`ChatSyncTransportError` for network failures, timeouts and
    non-2xx responses, and :class:`ChatSyncParseError` for bodies that are
    not UTF-8 JSON.
    """

    def __init__(
        self,
        config: ChatSyncConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request_json(self, method: str, endpoint: str, *, json_body: Any = None) -> Any:
        headers: dict[str, str] = {
            "accept": "application/json",
            "cache-control": "no-store",
            "user-agent": USER_AGENT,
        }
        data: str | None = None
        if json_body is not None:
            headers["content-type"] = "application/json"
            data = json.dumps(json_body, separators=(",", ":"))

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s body=%s", method, url, redact_for_log(json_body))

        try:
            async with self._http.request(method, url, data=data, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise ChatSyncTransportError(
                        f"HTTP {resp.status}: {resp.reason or ''}".rstrip(),
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except ChatSyncTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise ChatSyncTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ChatSyncTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            result = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            preview = body[:200].decode("utf-8", errors="replace")
            raise ChatSyncParseError(
                f"Invalid JSON from {endpoint}: {preview}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %s", method, endpoint, redact_for_log(result))
        return result
