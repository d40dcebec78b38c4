"""Playback queue sequencing over a generated playlist."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from radiodex.config import EndOfListPolicy, GenerationConfig
from radiodex.models import Advertisement, Station
from radiodex.playlist.generator import PlaylistGenerator
from radiodex.playlist.models import GeneratedPlaylist, PlaylistItem
from radiodex.playlist.resolver import PathResolver, UnresolvedItemKind

logger = logging.getLogger(__name__)


@dataclass
class PlaybackSession:
    """Playback state for one listener: station, playlist and position."""
    station: Station
    ads: Sequence[Advertisement] = ()
    config: GenerationConfig = field(default_factory=GenerationConfig)
    playlist: Optional[GeneratedPlaylist] = None
    index: Optional[int] = None


class Sequencer:
    """Moves a session's position through its playlist."""

    def __init__(self, generator: PlaylistGenerator,
                 policy: EndOfListPolicy = EndOfListPolicy.WRAP):
        self.generator = generator
        self.policy = policy

    def regenerate(self, session: PlaybackSession) -> Optional[int]:
        """Replace the session's playlist with a freshly generated one."""
        session.playlist = self.generator.generate(session.station, session.ads, session.config)
        session.index = 0 if len(session.playlist) else None
        return session.index

    def start(self, session: PlaybackSession) -> Optional[int]:
        if session.playlist is None:
            return self.regenerate(session)
        session.index = 0 if len(session.playlist) else None
        return session.index

    def current(self, session: PlaybackSession) -> Optional[PlaylistItem]:
        if session.playlist is None or session.index is None:
            return None
        return session.playlist[session.index]

    def next(self, session: PlaybackSession) -> Optional[int]:
        """Advance one item, applying the end-of-list policy after the last."""
        if session.playlist is None or session.playlist.is_empty:
            session.index = None
            return None
        if session.index is None:
            session.index = 0
        elif session.index < session.playlist.last_index():
            session.index += 1
        elif self.policy is EndOfListPolicy.REGENERATE:
            logger.info(f"End of playlist for {session.station.name}, regenerating")
            return self.regenerate(session)
        else:
            session.index = 0
        return session.index

    def previous(self, session: PlaybackSession) -> Optional[int]:
        """Step back one item, jumping to the last item from the first."""
        if session.playlist is None or session.playlist.is_empty:
            session.index = None
            return None
        if session.index is None or session.index == 0:
            session.index = session.playlist.last_index()
        else:
            session.index -= 1
        return session.index

    def jump_to(self, session: PlaybackSession, index: int) -> int:
        size = len(session.playlist) if session.playlist is not None else 0
        if not 0 <= index < size:
            raise IndexError(f"Playlist index {index} out of range (0-{size - 1})")
        session.index = index
        return index

    def resolve_current(self, session: PlaybackSession,
                        resolver=None) -> Optional[str]:
        """Resolve the current item, skipping forward past unresolvable ones.

        Args:
            session: Playback session
            resolver: PathResolver or RemoteQueryResolver, file paths by default

        Returns:
            The resolved identifier, or None if no item could be resolved
        """
        resolver = resolver or PathResolver()
        if session.playlist is None or session.index is None:
            return None

        for _ in range(len(session.playlist)):
            item = self.current(session)
            try:
                return resolver.resolve(item, session.station)
            except UnresolvedItemKind as e:
                logger.warning(f"Skipping item {session.index}: {e.reason}")
                session.index = (session.index + 1) % len(session.playlist)

        logger.error(f"No resolvable items in playlist for {session.station.name}")
        return None
