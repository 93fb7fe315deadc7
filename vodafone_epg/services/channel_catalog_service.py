"""
Channel Catalog Service

Loads the reference list mapping provider channel keys to display names and
logos. The list is a tab-separated text resource:

    KEY<TAB>"Display Name"<TAB>https://logo.url

Lines starting with '#' are comments and blank lines are skipped.
"""
import logging
from importlib import resources
from pathlib import Path

from vodafone_epg.errors import DataError
from vodafone_epg.services.fetch_types import ChannelEntry


logger = logging.getLogger(__name__)

BUNDLED_CHANNELS_RESOURCE = "channels.tsv"


def parse_channel_catalog(text: str) -> dict[str, ChannelEntry]:
    """
    Parse reference channel list content.

    Lines with fewer than three fields are kept; the missing name or icon is
    stored as None.

    Args:
        text: Tab-separated channel list

    Returns:
        Mapping of provider channel key to ChannelEntry, in file order
    """
    catalog: dict[str, ChannelEntry] = {}

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        fields = [part.strip() for part in raw_line.split("\t")]
        key = fields[0]
        if not key:
            logger.debug(f"Skipping channel line {line_no} with empty key")
            continue

        name = fields[1].strip('"') if len(fields) > 1 and fields[1] else None
        icon_url = fields[2] if len(fields) > 2 and fields[2] else None
        if len(fields) < 3:
            logger.debug(f"Channel line {line_no} has {len(fields)} fields: {raw_line!r}")

        catalog[key] = ChannelEntry(key=key, name=name or None, icon_url=icon_url)

    return catalog


def load_channel_catalog(path: Path | str | None = None) -> dict[str, ChannelEntry]:
    """
    Load the reference channel list.

    Args:
        path: Optional file overriding the list bundled with the package

    Returns:
        Mapping of provider channel key to ChannelEntry

    Raises:
        DataError: If the resource cannot be read
    """
    try:
        if path is not None:
            logger.debug(f"Loading channel list from {path}")
            text = Path(path).read_text(encoding="utf-8")
        else:
            logger.debug("Loading bundled channel list")
            text = (
                resources.files("vodafone_epg")
                .joinpath("data").joinpath(BUNDLED_CHANNELS_RESOURCE)
                .read_text(encoding="utf-8")
            )
    except (OSError, UnicodeDecodeError) as e:
        raise DataError(f"Cannot read channel list {path or BUNDLED_CHANNELS_RESOURCE}: {e}") from e

    catalog = parse_channel_catalog(text)
    logger.info(f"Loaded {len(catalog)} channels from reference list")
    return catalog
