"""
Grabber configuration file

Stores the selected provider channel keys, one 'channel=KEY' line each.
"""
import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from vodafone_epg.errors import ConfigurationError
from vodafone_epg.services.fetch_types import ChannelEntry


logger = logging.getLogger(__name__)

CHANNEL_KEY = "channel"
ANSWERS = ("yes", "no", "all", "none")


def read_grabber_config(path: Path) -> list[str]:
    """
    Read selected channel keys.

    Args:
        path: Configuration file

    Returns:
        Channel keys in file order, without duplicates

    Raises:
        ConfigurationError: If the file is missing or holds unknown settings
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file {path} not found, run the grabber with --configure"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    keys: list[str] = []
    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        name, sep, value = line.partition("=")
        if not sep or name.strip() != CHANNEL_KEY or not value.strip():
            raise ConfigurationError(f"Invalid line {line_no} in {path}: {raw_line!r}")

        key = value.strip()
        if key not in keys:
            keys.append(key)

    if not keys:
        raise ConfigurationError(f"No channels selected in {path}, run the grabber with --configure")

    logger.debug(f"Read {len(keys)} channels from {path}")
    return keys


def write_grabber_config(path: Path, channel_keys: list[str]) -> None:
    """Write selected channel keys, creating parent directories"""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"{CHANNEL_KEY}={key}" for key in channel_keys]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info(f"Wrote {len(channel_keys)} channels to {path}")


def select_channels(
    catalog: Mapping[str, ChannelEntry],
    ask: Callable[[str], str] | None = None,
) -> list[str]:
    """
    Interactively choose channels from the catalog.

    Each channel is offered in catalog order. 'all' and 'none' answer the
    remaining channels at once; an empty answer means yes.
    """
    ask = ask or input
    selected: list[str] = []
    remaining_answer: str | None = None

    for key, entry in catalog.items():
        answer = remaining_answer
        while answer is None:
            reply = ask(f"Add channel {entry.name or key}? [yes,no,all,none (default=yes)] ").strip().lower()
            reply = reply or "yes"
            if reply in ANSWERS:
                answer = reply
                continue
            matches = [option for option in ANSWERS if option.startswith(reply)]
            if len(matches) == 1:
                answer = matches[0]

        if answer in ("all", "none"):
            remaining_answer = answer
        if answer in ("yes", "all"):
            selected.append(key)

    return selected
