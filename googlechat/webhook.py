"""Google Chat webhook client.

Design:
- Every send is a single POST submitted to a shared thread pool.
- The caller receives a `concurrent.futures.Future`; there is no queue and no retry.
- Only HTTP 200 counts as success, anything else fails the future.
"""

from __future__ import annotations

import logging
import re
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

import requests

from googlechat.cards import text_card_payload, text_payload
from utils.proxy import ProxyConfig, format_proxy, proxy_label

logger = logging.getLogger(__name__)

_COLOR_TOKEN = re.compile(r"\$\{([^{}]*)\}")

_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="googlechat")


class GoogleChatError(Exception):
    """Base class for errors raised by this package."""


class WebhookResponseError(GoogleChatError):
    """Raised when the webhook answers with a status other than 200."""

    def __init__(self, response: requests.Response):
        """
        Args:
            response: The raw HTTP response, kept for status/body inspection.
        """
        self.response = response
        self.status_code = response.status_code
        super().__init__(f"webhook failed {response.status_code}: {response.text}")


class ChatClient:
    """One Google Chat webhook destination.

    The `url` attribute may be changed at any time; the proxy may be set
    whenever before sending.
    """

    CHAT_COLORS: Mapping[str, str] = MappingProxyType(
        {
            "RED": "#d81111",
            "GREEN": "#1b9a19",
            "MAGENTA": "#e23aa7",
            "YELLOW": "#ffef1b",
            "BLUE": "#19239e",
            "CYAN": "#1ba9ff",
            "GREY": "#a5a5a5",
        }
    )

    def __init__(self, url: str) -> None:
        """Create a client with no proxy.

        Args:
            url: Webhook URL configured in the Google Chat room. Not validated,
                a malformed URL fails at send time.
        """
        self.url = url
        self.proxy: Optional[str] = None

    @staticmethod
    def new_thread_key() -> str:
        """Return a random version-4 identifier used as a thread key."""
        return str(uuid.uuid4())

    def set_proxy(self, config: Union[ProxyConfig, Mapping[str, Any]]) -> None:
        """Route future sends through an authenticated HTTP proxy.

        Args:
            config: ProxyConfig or mapping with `proxy`, `port`, `user`, `password`.
                Missing fields are not validated.
        """
        if not isinstance(config, ProxyConfig):
            config = ProxyConfig.from_mapping(config)
        self.proxy = config.url()

    def resolve_color_tokens(self, text: str) -> str:
        """Replace `${NAME}` tokens naming a known color with its hex code.

        Every occurrence is replaced. Unknown tokens are left untouched.
        """

        def _substitute(match: re.Match) -> str:
            return self.CHAT_COLORS.get(match.group(1), match.group(0))

        return _COLOR_TOKEN.sub(_substitute, text)

    def send_text(self, text: str, thread: Optional[str] = None) -> Future:
        """Send a plain text message."""
        return self.send(text_payload(text), thread)

    def send_card(self, text: str, thread: Optional[str] = None) -> Future:
        """Send a text-only card; `${COLOR}` tokens in the text are resolved first."""
        return self.send(text_card_payload(self.resolve_color_tokens(text)), thread)

    def send(self, payload: dict[str, Any], thread: Optional[str] = None) -> Future:
        """Send an arbitrary message payload.

        Args:
            payload: JSON-serializable message body (see the Google Chat
                message format reference).
            thread: Thread key. When omitted a new one is generated, so the
                message starts a new thread.

        Returns:
            A Future resolved with the parsed response body on HTTP 200. It
            fails with the transport exception, or with WebhookResponseError
            carrying the response for any other status.
        """
        thread_key = thread or self.new_thread_key()
        return _executor.submit(self._post, payload, thread_key, self.url, self.proxy)

    def _post(
        self,
        payload: dict[str, Any],
        thread_key: str,
        url: str,
        proxy: Optional[str],
    ) -> Any:
        """Issue the POST request and interpret the response."""
        logger.debug(
            "Posting message to webhook (thread=%s, proxy=%s)",
            thread_key,
            proxy_label(proxy) if proxy else "none",
        )
        resp = requests.post(
            url,
            params={"threadKey": thread_key},
            json=payload,
            proxies=format_proxy(proxy) if proxy else None,
        )
        return self._handle_response(resp)

    @staticmethod
    def _handle_response(resp: requests.Response) -> Any:
        """Return the parsed body on HTTP 200, raise otherwise."""
        if resp.status_code != 200:
            logger.warning("Webhook answered with status %s", resp.status_code)
            raise WebhookResponseError(resp)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            # Not JSON: hand back the raw text.
            return resp.text
