"""
Listings Assembly Service

Walks the requested days, time buckets and channels, maps every returned
programme and collapses duplicates caused by programmes spanning a bucket or
midnight boundary.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Sequence

from vodafone_epg.errors import ConfigurationError, FetchError
from vodafone_epg.services.api_client import BUCKETS, VodafoneApiClient
from vodafone_epg.services.fetch_types import (
    ChannelEntry,
    ChannelRecord,
    ListingsResult,
    ProgrammeRecord,
)
from vodafone_epg.services.programme_mapper import LANGUAGE, map_programme
from vodafone_epg.utils.logging_helpers import (
    log_day_processing,
    log_grab_end,
    log_grab_start,
    log_listings_summary,
)
from vodafone_epg.utils.text import derive_channel_id, sanitize_text


logger = logging.getLogger(__name__)

OUTDATED_CHANNELS_HINT = (
    "the channel list is probably outdated, please run the grabber with --configure"
)


def build_channel_record(entry: ChannelEntry, suffix: str) -> ChannelRecord:
    """
    Build the channel element data for a catalog entry.

    Raises:
        ConfigurationError: If the catalog entry has no display name
    """
    if not entry.name:
        raise ConfigurationError(f"Channel '{entry.key}' has no display name in the channel list")
    return ChannelRecord(
        id=derive_channel_id(entry.name, suffix),
        display_names=[(sanitize_text(entry.name), LANGUAGE)],
        icon_url=entry.icon_url,
    )


def add_programme(result: ListingsResult, programme: ProgrammeRecord) -> bool:
    """
    Insert a programme, replacing any earlier one with the same start and stop.

    Returns:
        True if the programme replaced an existing entry
    """
    channel_programmes = result.programmes.setdefault(programme.channel_id, {})
    replaced = programme.dedup_key in channel_programmes
    channel_programmes[programme.dedup_key] = programme
    return replaced


class ListingsAssembler:
    """Collects channels and programmes for a run."""

    def __init__(
        self,
        client: VodafoneApiClient,
        catalog: Mapping[str, ChannelEntry],
        *,
        channel_id_suffix: str,
    ) -> None:
        self.client = client
        self.catalog = catalog
        self.channel_id_suffix = channel_id_suffix

    def run(self, channel_keys: Sequence[str], days: Sequence[date]) -> ListingsResult:
        """
        Fetch and assemble listings.

        Args:
            channel_keys: Provider channel keys in output order
            days: Calendar days to fetch

        Returns:
            ListingsResult with channel records and deduplicated programmes

        Raises:
            ConfigurationError: If a channel key is not in the catalog
            FetchError: If the API returns an undecodable envelope
        """
        entries = self._resolve_channels(channel_keys)
        result = ListingsResult()

        log_grab_start(logger)
        logger.info(
            f"Fetching {len(entries)} channels over {len(days)} days "
            f"({days[0].isoformat() if days else '-'} -> {days[-1].isoformat() if days else '-'})"
        )

        for day_index, day in enumerate(days, start=1):
            log_day_processing(logger, day_index, len(days), day)
            for bucket in BUCKETS:
                for entry in entries:
                    self._process_bucket(result, entry, day, bucket)

        log_listings_summary(logger, len(result.channels), result.programme_count, result.empty_buckets)
        log_grab_end(logger)
        return result

    def _resolve_channels(self, channel_keys: Sequence[str]) -> list[ChannelEntry]:
        missing = [key for key in channel_keys if key not in self.catalog]
        if missing:
            raise ConfigurationError(
                f"Unknown channels {', '.join(missing)}: {OUTDATED_CHANNELS_HINT}"
            )
        entries = [self.catalog[key] for key in channel_keys]
        for entry in entries:
            build_channel_record(entry, self.channel_id_suffix)
        return entries

    def _process_bucket(
        self,
        result: ListingsResult,
        entry: ChannelEntry,
        day: date,
        bucket: str
    ) -> None:
        channel = build_channel_record(entry, self.channel_id_suffix)
        result.channels[channel.id] = channel

        outcome = self.client.fetch_bucket(entry.key, day, bucket)
        result.requests_made += 1

        if outcome.status == "failed":
            raise FetchError(
                f"Failed to fetch {entry.key} on {day.isoformat()} ({bucket}): "
                f"{outcome.reason}; {OUTDATED_CHANNELS_HINT}"
            )

        if outcome.status == "empty":
            result.empty_buckets += 1
            logger.warning(
                f"No programmes for {entry.key} on {day.isoformat()} ({bucket}): {outcome.reason}"
            )
            return

        mapped = 0
        for data in outcome.objects:
            programme = map_programme(data, channel.id, day)
            if programme is None:
                continue
            if add_programme(result, programme):
                logger.debug(
                    f"Replaced duplicate programme {programme.start} -> {programme.stop} on {channel.id}"
                )
            mapped += 1

        logger.debug(f"  {entry.key} {day.isoformat()} {bucket}: {mapped} programmes")
