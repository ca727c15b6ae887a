import json
import logging
import os
from typing import Any


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "bots": [],
    "proxy": None,
    "log_level": "INFO",
}


def load_config(path: str = "config.json") -> dict[str, Any]:
    """Load and validate the bot configuration from a JSON file.

    Behavior:
        - If the config file does not exist, it is created with defaults and the
          program exits to force the user to fill it in.
        - If a bot entry lacks a `name` or `url`, the offending entries are
          reported and the program exits.

    Notes:
        Proxy sections are not validated here. An incomplete proxy only shows
        up as a connection error when a message is sent.

    Args:
        path: Path to the JSON config file.

    Returns:
        Parsed configuration dictionary, with missing top-level keys filled
        from DEFAULT_CONFIG.

    Raises:
        json.JSONDecodeError: If the file exists but contains invalid JSON.
        OSError: If the file cannot be read/written.
    """
    if not os.path.isfile(path):
        save_config(DEFAULT_CONFIG, path)
        logger.error("Config file '%s' was created. Please fill it in and restart the program.", path)
        raise SystemExit(1)

    with open(path, "r", encoding="utf-8") as f:
        config: dict[str, Any] = {**DEFAULT_CONFIG, **json.load(f)}

    invalid = [
        f"bots[{index}]"
        for index, bot in enumerate(config.get("bots") or [])
        if not isinstance(bot, dict) or not bot.get("name") or not bot.get("url")
    ]
    if invalid:
        logger.error(
            "The following bot entries in %s need both a name and a url: %s",
            path,
            ", ".join(invalid),
        )
        raise SystemExit(1)

    return config


def save_config(config: dict[str, Any], path: str = "config.json") -> None:
    """Persist the given configuration to disk as pretty-printed JSON.

    Args:
        config: Configuration dictionary to write.
        path: Destination path for the JSON config file.

    Raises:
        OSError: If the file cannot be written.
        TypeError: If `config` contains non-JSON-serializable values.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
