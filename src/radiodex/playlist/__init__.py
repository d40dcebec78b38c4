"""Playlist generation, resolution, sequencing and export for radiodex."""

from radiodex.playlist.models import GeneratedPlaylist, ItemKind, PlaylistItem, PlaylistStats
from radiodex.playlist.generator import PlaylistGenerator
from radiodex.playlist.resolver import PathResolver, RemoteQueryResolver, UnresolvedItemKind
from radiodex.playlist.sequencer import PlaybackSession, Sequencer

__all__ = [
    "GeneratedPlaylist", "ItemKind", "PlaylistItem", "PlaylistStats",
    "PlaylistGenerator", "PathResolver", "RemoteQueryResolver", "UnresolvedItemKind",
    "PlaybackSession", "Sequencer",
]
