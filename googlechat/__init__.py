"""Google Chat integration package.

This package provides a webhook client returning futures for each send,
and a registry of named clients built from `config.json`.
"""

from .registry import ChatClientRegistry, build_registry
from .webhook import ChatClient, GoogleChatError, WebhookResponseError

__all__ = [
    "ChatClient",
    "ChatClientRegistry",
    "GoogleChatError",
    "WebhookResponseError",
    "build_registry",
]
