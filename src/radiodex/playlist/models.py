"""Data models for generated playlists."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Tuple, Union
from uuid import uuid4

from radiodex.models import Advertisement, Segment, Song

CatalogEntry = Union[Song, Segment, Advertisement]


class ItemKind(Enum):
    """Kind of a playlist item."""
    SONG = "song"
    JINGLE = "jingle"
    AD = "ad"
    SEGMENT = "segment"


@dataclass(frozen=True)
class PlaylistItem:
    """One playable entry of a generated playlist."""
    kind: ItemKind
    name: str             # Display name, e.g. "[Caller] Caller 3"
    path: str             # Resolved file path relative to the library root
    station_key: str
    source: CatalogEntry  # Catalog entry the item was drawn from
    intro: int = 0        # Chosen intro variant (songs only)
    outro: int = 0        # Chosen outro variant (songs only)


@dataclass(frozen=True)
class PlaylistStats:
    """Item counts per kind."""
    songs: int = 0
    jingles: int = 0
    ads: int = 0
    segments: int = 0


@dataclass(frozen=True)
class GeneratedPlaylist:
    """An ordered, immutable playlist for a single station."""
    station_key: str
    station_name: str
    items: Tuple[PlaylistItem, ...] = ()
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[PlaylistItem]:
        return iter(self.items)

    def __getitem__(self, index: int) -> PlaylistItem:
        return self.items[index]

    @property
    def is_empty(self) -> bool:
        return not self.items

    def last_index(self) -> Optional[int]:
        return len(self.items) - 1 if self.items else None

    def stats(self) -> PlaylistStats:
        counts = {kind: 0 for kind in ItemKind}
        for item in self.items:
            counts[item.kind] += 1
        return PlaylistStats(
            songs=counts[ItemKind.SONG],
            jingles=counts[ItemKind.JINGLE],
            ads=counts[ItemKind.AD],
            segments=counts[ItemKind.SEGMENT]
        )
