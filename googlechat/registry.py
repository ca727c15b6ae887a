"""Named collection of Google Chat webhook clients."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

import utils.config
from googlechat.webhook import ChatClient
from utils.proxy import ProxyConfig

logger = logging.getLogger(__name__)

ProxySetting = Union[ProxyConfig, Mapping[str, Any]]


class ChatClientRegistry:
    """Holds one ChatClient per bot name, in registration order.

    Bots without their own proxy use the registry default proxy, if any.
    """

    def __init__(
        self,
        bots: Optional[Iterable[Mapping[str, Any]]] = None,
        proxy: Optional[ProxySetting] = None,
    ) -> None:
        """
        Args:
            bots: Entries shaped like {"name": ..., "url": ..., "proxy": {...}}.
            proxy: Default proxy for entries that don't specify one.
        """
        self.default_proxy = proxy
        self.bots: dict[str, ChatClient] = {}

        for bot in bots or []:
            self.register_bot(bot["name"], bot)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ChatClientRegistry":
        """Build a registry from a dict with `bots` and `proxy` keys."""
        return cls(bots=config.get("bots"), proxy=config.get("proxy"))

    def register_bot(self, name: str, config: Mapping[str, Any]) -> None:
        """Create a client for `config["url"]` and store it under `name`.

        An existing bot with the same name is replaced.
        """
        client = ChatClient(config["url"])
        proxy = config.get("proxy")
        if proxy is None:
            proxy = self.default_proxy
        if proxy is not None:
            client.set_proxy(proxy)

        if name in self.bots:
            logger.debug("Replacing bot %s", name)
        self.bots[name] = client

    def get_bot(self, name: str) -> Optional[ChatClient]:
        """Return the client registered under `name`, or None if there is none."""
        return self.bots.get(name)

    def for_each_bot(self, fn: Callable[[ChatClient, str], Any]) -> None:
        """Call `fn(client, name)` for every bot, in registration order."""
        for name, client in list(self.bots.items()):
            fn(client, name)

    def list_bot_names(self) -> list[str]:
        """Return the bot names in registration order, as a new list."""
        return list(self.bots)

    def __contains__(self, name: object) -> bool:
        return name in self.bots

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_bot_names())

    def __len__(self) -> int:
        return len(self.bots)


def build_registry(path: str = "config.json") -> ChatClientRegistry:
    """Create the registry from the bots listed in a JSON config file."""
    config = utils.config.load_config(path)
    registry = ChatClientRegistry.from_config(config)
    logger.debug("Loaded %d bot(s) from %s", len(registry), path)
    return registry
