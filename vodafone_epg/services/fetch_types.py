"""
Shared dataclasses used across the listings pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(slots=True, frozen=True)
class ChannelEntry:
    """One row of the reference channel list."""
    key: str
    name: str | None = None
    icon_url: str | None = None


@dataclass(slots=True)
class ChannelRecord:
    """Channel as written to the listings document."""
    id: str
    display_names: list[tuple[str, str]]
    icon_url: str | None = None


@dataclass(slots=True)
class ProgrammeImage:
    """Programme artwork with its XMLTV image classification."""
    url: str
    type: str | None = None
    orient: str | None = None
    width: int | None = None
    height: int | None = None


@dataclass(slots=True)
class EpisodeNumber:
    """Episode numbering in both XMLTV notations."""
    xmltv_ns: str
    onscreen: str


@dataclass(slots=True)
class ProgrammeRecord:
    """Programme as written to the listings document."""
    channel_id: str
    start: str
    stop: str
    title: tuple[str, str]
    description: tuple[str, str] | None = None
    year: str | None = None
    episode_num: EpisodeNumber | None = None
    length_seconds: int | None = None
    icon: ProgrammeImage | None = None
    categories: list[tuple[str, str]] = field(default_factory=list)
    country: str | None = None
    rating: tuple[str, str] | None = None
    images: list[ProgrammeImage] = field(default_factory=list)
    actors: list[str] = field(default_factory=list)
    directors: list[str] = field(default_factory=list)

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.start, self.stop)


@dataclass(slots=True)
class FetchOutcome:
    """Result of one API request for a (channel, day, bucket) tuple."""
    status: Literal["ok", "empty", "failed"]
    objects: list[dict] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def ok(cls, objects: list[dict]) -> FetchOutcome:
        return cls(status="ok", objects=objects)

    @classmethod
    def empty(cls, reason: str) -> FetchOutcome:
        return cls(status="empty", reason=reason)

    @classmethod
    def failed(cls, reason: str) -> FetchOutcome:
        return cls(status="failed", reason=reason)


@dataclass(slots=True)
class ListingsResult:
    """Channels and deduplicated programmes gathered during one run."""
    channels: dict[str, ChannelRecord] = field(default_factory=dict)
    programmes: dict[str, dict[tuple[str, str], ProgrammeRecord]] = field(default_factory=dict)
    requests_made: int = 0
    empty_buckets: int = 0

    @property
    def programme_count(self) -> int:
        return sum(len(programmes) for programmes in self.programmes.values())

    def iter_programmes(self):
        """Yield programmes grouped by channel, channels in insertion order."""
        for channel_id in self.channels:
            yield from self.programmes.get(channel_id, {}).values()


__all__ = [
    "ChannelEntry",
    "ChannelRecord",
    "ProgrammeImage",
    "EpisodeNumber",
    "ProgrammeRecord",
    "FetchOutcome",
    "ListingsResult",
]
