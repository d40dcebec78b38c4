"""Resolution of playlist items to playable resource identifiers.

Two resolvers share the same category labels:

- :class:`PathResolver` maps an item to a file path relative to the library
  root, as used by exported playlists.
- :class:`RemoteQueryResolver` maps an item to a query against a live
  playback endpoint.

Both are pure: the same item and station always give the same identifier.
"""

import logging
from typing import Dict, List, Tuple
from urllib.parse import quote, urlencode

from radiodex.models import Advertisement, Segment, SegmentType, Song, Station
from radiodex.playlist.models import ItemKind, PlaylistItem

logger = logging.getLogger(__name__)

# Folder label per segment type, shared by both resolvers
SEGMENT_FOLDERS: Dict[SegmentType, str] = {
    SegmentType.STATION_JINGLE: 'Jingles',
    SegmentType.CALLER: 'Callers',
    SegmentType.WEATHER: 'Weather',
    SegmentType.BRIDGE_ANNOUNCEMENT: 'Bridge Announcements',
    SegmentType.DJ_TALK: 'DJ Talk',
    SegmentType.STORY: 'Story',
}


class UnresolvedItemKind(Exception):
    """Raised when an item cannot be mapped to a resource identifier."""

    def __init__(self, item: object, reason: str = "unrecognized item kind"):
        self.item = item
        self.reason = reason
        super().__init__(f"Cannot resolve {item!r}: {reason}")


def segment_folder(segment_type: SegmentType) -> str:
    return SEGMENT_FOLDERS[segment_type]


def _check_source(item: PlaylistItem) -> None:
    """Ensure the item's kind is known and matches its catalog entry."""
    expected = {
        ItemKind.SONG: Song,
        ItemKind.JINGLE: Segment,
        ItemKind.SEGMENT: Segment,
        ItemKind.AD: Advertisement,
    }
    kind = getattr(item, 'kind', None)
    if kind not in expected:
        raise UnresolvedItemKind(item)
    source = getattr(item, 'source', None)
    if not isinstance(source, expected[kind]):
        raise UnresolvedItemKind(
            item, f"{kind.value} item carries a {type(source).__name__}"
        )


class PathResolver:
    """Build library-relative file paths for catalog entries."""

    def song_path(self, song: Song, station: Station, intro: int = 0, outro: int = 0) -> str:
        if intro == 0 and outro == 0:
            filename = f"{song.display_name}.mp3"
        else:
            filename = f"{song.display_name} (Intro {intro}, Outro {outro}).mp3"
        return f"songs/{station.name}/{filename}"

    def segment_path(self, segment: Segment, station: Station) -> str:
        return f"segments/{station.name}/{segment_folder(segment.type)}/{segment.title}.ogg"

    def ad_path(self, ad: Advertisement) -> str:
        return f"advertisements/{ad.title}.ogg"

    def resolve(self, item: PlaylistItem, station: Station) -> str:
        """Resolve an item to its file path.

        Raises:
            UnresolvedItemKind: if the item kind is unknown or inconsistent
        """
        _check_source(item)
        if item.kind is ItemKind.SONG:
            return self.song_path(item.source, station, item.intro, item.outro)
        if item.kind in (ItemKind.JINGLE, ItemKind.SEGMENT):
            return self.segment_path(item.source, station)
        if item.kind is ItemKind.AD:
            return self.ad_path(item.source)
        raise UnresolvedItemKind(item)


class RemoteQueryResolver:
    """Build query identifiers for the live playback endpoint.

    ``/api/play/song?station=radio_x&artists=Rage%20Against%20the%20Machine&title=Killing%20in%20the%20Name&intro=1``
    """

    def __init__(self, base_url: str = '/api/play'):
        self.base_url = base_url.rstrip('/')

    def _build(self, category: str, params: List[Tuple[str, object]]) -> str:
        return f"{self.base_url}/{category}?{urlencode(params, quote_via=quote)}"

    def resolve(self, item: PlaylistItem, station: Station) -> str:
        """Resolve an item to a remote query.

        Raises:
            UnresolvedItemKind: if the item kind is unknown or inconsistent
        """
        _check_source(item)
        if item.kind is ItemKind.SONG:
            song = item.source
            params = [
                ('station', station.key),
                ('artists', song.artist_line),
                ('title', song.title),
            ]
            if item.intro:
                params.append(('intro', item.intro))
            if item.outro:
                params.append(('outro', item.outro))
            return self._build(ItemKind.SONG.value, params)
        if item.kind in (ItemKind.JINGLE, ItemKind.SEGMENT):
            segment = item.source
            return self._build(item.kind.value, [
                ('station', station.key),
                ('folder', segment_folder(segment.type)),
                ('title', segment.title),
            ])
        if item.kind is ItemKind.AD:
            return self._build(ItemKind.AD.value, [('title', item.source.title)])
        raise UnresolvedItemKind(item)
