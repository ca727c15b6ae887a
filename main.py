"""Project entry-point.

This module:
- Loads the bot configuration and sets up logging
- Sends a single text or card message through a named bot
- Lists the configured bots
"""

import argparse
import logging
from typing import Optional, Sequence

import requests

import utils.config
from googlechat import ChatClientRegistry, GoogleChatError
from utils.logging_config import configure_logging

logger = logging.getLogger("googlechat.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Post a message to a Google Chat room webhook.")
    parser.add_argument("bot", nargs="?", help="Name of the configured bot")
    parser.add_argument("text", nargs="?", help="Message text; ${RED}-style color tokens work with --card")
    parser.add_argument("--config", default="config.json", help="Path to the JSON config file")
    parser.add_argument("--card", action="store_true", help="Send the text as a card")
    parser.add_argument("--thread", help="Thread key to reply in (a new thread by default)")
    parser.add_argument("--list", action="store_true", help="List configured bots and exit")
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the process exit code."""
    args = _build_parser().parse_args(argv)

    config = utils.config.load_config(args.config)
    configure_logging(config.get("log_level", "INFO"))
    registry = ChatClientRegistry.from_config(config)

    if args.list:
        for name in registry.list_bot_names():
            print(name)
        return 0

    if not args.bot or args.text is None:
        logger.error("Both a bot name and a message text are required")
        return 2

    client = registry.get_bot(args.bot)
    if client is None:
        logger.error("Unknown bot %r (configured: %s)", args.bot, ", ".join(registry) or "none")
        return 1

    send = client.send_card if args.card else client.send_text
    try:
        send(args.text, args.thread).result()
    except (GoogleChatError, requests.RequestException) as exc:
        logger.error("Message not delivered: %s", exc)
        return 1

    logger.info("Message delivered through %s", args.bot)
    return 0


if __name__ == "__main__":
    raise SystemExit(run_cli())
