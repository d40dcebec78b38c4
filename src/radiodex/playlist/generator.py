"""Playlist generation for radio stations.

Music stations interleave jingles, one talk segment, the song itself and an
occasional advertisement for every song in the station's catalog. Talk radio
stations play their shows in episode order with news bulletins slotted in
after every second show.
"""

import logging
import random
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from radiodex.config import DEFAULT_NEWS_PATTERN, GenerationConfig
from radiodex.models import Advertisement, Segment, SegmentType, Song, Station
from radiodex.playlist.models import GeneratedPlaylist, ItemKind, PlaylistItem
from radiodex.playlist.resolver import PathResolver

logger = logging.getLogger(__name__)

EPISODE_PATTERN = re.compile(r"#\s*(\d+)")

# Shows played between two news bulletins on talk radio
SHOWS_PER_NEWS = 2

# Display label for the segments that may precede a song
SEGMENT_LABELS: Dict[SegmentType, str] = {
    SegmentType.BRIDGE_ANNOUNCEMENT: 'Bridge',
    SegmentType.WEATHER: 'Weather',
    SegmentType.DJ_TALK: 'DJ',
    SegmentType.CALLER: 'Caller',
    SegmentType.STORY: 'Story',
}


def parse_episode(title: str) -> int:
    """Episode number following a '#' in the title, 0 when there is none."""
    match = EPISODE_PATTERN.search(title)
    return int(match.group(1)) if match else 0


def order_by_episode(songs: Iterable[Song], rng: random.Random) -> List[Song]:
    """Order songs by ascending episode number, shuffling within each episode."""
    episodes: Dict[int, List[Song]] = {}
    for song in songs:
        episodes.setdefault(parse_episode(song.title), []).append(song)

    ordered = []
    for episode in sorted(episodes):
        group = list(episodes[episode])
        rng.shuffle(group)
        ordered.extend(group)
    return ordered


def pop_random(pool: list, rng: random.Random):
    """Remove and return a uniformly chosen entry, None if the pool is empty."""
    if not pool:
        return None
    return pool.pop(rng.randrange(len(pool)))


class _GenerationPass:
    """Working pools and output of a single generate() call."""

    def __init__(self, station: Station, ads: Sequence[Advertisement],
                 rng: random.Random, resolver: PathResolver):
        self.station = station
        self.rng = rng
        self.resolver = resolver
        self.songs: List[Song] = list(station.songs)
        self.segments: Dict[SegmentType, List[Segment]] = {
            segment_type: list(station.segments_of(segment_type)) for segment_type in SegmentType
        }
        self.ads: List[Advertisement] = list(ads)
        self.items: List[PlaylistItem] = []

    def maybe_jingle(self, probability: float):
        jingles = self.segments[SegmentType.STATION_JINGLE]
        if jingles and self.rng.random() < probability:
            jingle = pop_random(jingles, self.rng)
            self.items.append(PlaylistItem(
                kind=ItemKind.JINGLE,
                name=jingle.title,
                path=self.resolver.segment_path(jingle, self.station),
                station_key=self.station.key,
                source=jingle
            ))

    def maybe_ad(self, enabled: bool, probability: float):
        if enabled and self.ads and self.rng.random() < probability:
            ad = pop_random(self.ads, self.rng)
            self.items.append(PlaylistItem(
                kind=ItemKind.AD,
                name=ad.title,
                path=self.resolver.ad_path(ad),
                station_key=self.station.key,
                source=ad
            ))

    def add_segment(self, candidates: Iterable[SegmentType]):
        available = [segment_type for segment_type in candidates if self.segments[segment_type]]
        if not available:
            return
        segment_type = self.rng.choice(available)
        segment = pop_random(self.segments[segment_type], self.rng)
        self.items.append(PlaylistItem(
            kind=ItemKind.SEGMENT,
            name=f"[{SEGMENT_LABELS[segment_type]}] {segment.title}",
            path=self.resolver.segment_path(segment, self.station),
            station_key=self.station.key,
            source=segment
        ))

    def add_song(self, song: Song, intro: int = 0, outro: int = 0):
        self.items.append(PlaylistItem(
            kind=ItemKind.SONG,
            name=song.display_name,
            path=self.resolver.song_path(song, self.station, intro, outro),
            station_key=self.station.key,
            source=song,
            intro=intro,
            outro=outro
        ))

    def result(self) -> GeneratedPlaylist:
        return GeneratedPlaylist(
            station_key=self.station.key,
            station_name=self.station.name,
            items=tuple(self.items)
        )


class PlaylistGenerator:
    """Generates randomized playlists for music and talk radio stations."""

    def __init__(self, rng: Optional[random.Random] = None,
                 resolver: Optional[PathResolver] = None,
                 talk_radio_keys: Iterable[str] = ('wctr',),
                 news_pattern: str = DEFAULT_NEWS_PATTERN):
        """Initialize the generator.

        Args:
            rng: Random source; a fresh unseeded one when omitted
            resolver: Resolver used to fill in item paths
            talk_radio_keys: Keys of stations generated with the talk radio rules
            news_pattern: Regex matched against titles to detect news bulletins
        """
        self.rng = rng or random.Random()
        self.resolver = resolver or PathResolver()
        self.talk_radio_keys = frozenset(talk_radio_keys)
        self.news_pattern = re.compile(news_pattern, re.IGNORECASE)

    def is_talk_radio(self, station: Station) -> bool:
        return station.key in self.talk_radio_keys

    def is_news(self, song: Song) -> bool:
        return bool(self.news_pattern.search(song.title))

    def generate(self, station: Station, ads: Sequence[Advertisement],
                 config: Optional[GenerationConfig] = None) -> GeneratedPlaylist:
        """Generate a playlist that plays every song of the station once.

        Args:
            station: Station to generate for
            ads: Advertisement pool shared by all stations
            config: Category switches and probabilities

        Returns:
            The generated playlist, empty if the station has no songs
        """
        config = config or GenerationConfig()
        generation = _GenerationPass(station, ads, self.rng, self.resolver)

        if self.is_talk_radio(station):
            self._generate_talk(generation, config)
        else:
            self._generate_music(generation, config)

        playlist = generation.result()
        stats = playlist.stats()
        logger.info(
            f"Generated playlist for {station.name}: {stats.songs} songs, "
            f"{stats.jingles} jingles, {stats.segments} segments, {stats.ads} ads"
        )
        return playlist

    def _segment_candidates(self, config: GenerationConfig) -> Tuple[SegmentType, ...]:
        candidates = []
        if config.include_bridges:
            candidates.append(SegmentType.BRIDGE_ANNOUNCEMENT)
        if config.include_weather:
            candidates.append(SegmentType.WEATHER)
        candidates.extend([SegmentType.DJ_TALK, SegmentType.CALLER, SegmentType.STORY])
        return tuple(candidates)

    def _pick_variant(self, count: int) -> int:
        return self.rng.randint(0, count) if count > 0 else 0

    def _generate_music(self, generation: _GenerationPass, config: GenerationConfig):
        probabilities = config.probabilities
        candidates = self._segment_candidates(config)
        iterations = len(generation.songs)

        for _ in range(iterations):
            if not generation.songs:
                break
            generation.maybe_jingle(probabilities.jingle)
            generation.add_segment(candidates)

            song = pop_random(generation.songs, self.rng)
            intro = self._pick_variant(song.intro_count)
            outro = self._pick_variant(song.outro_count)
            logger.debug(f"Picked '{song.display_name}' (intro {intro}, outro {outro})")
            generation.add_song(song, intro, outro)

            generation.maybe_ad(config.include_ads, probabilities.ad)

    def _generate_talk(self, generation: _GenerationPass, config: GenerationConfig):
        probabilities = config.probabilities
        news = order_by_episode((s for s in generation.songs if self.is_news(s)), self.rng)
        shows = order_by_episode((s for s in generation.songs if not self.is_news(s)), self.rng)
        generation.songs = []
        logger.debug(f"Talk radio: {len(shows)} shows, {len(news)} news bulletins")

        shows_since_news = 0
        next_news = 0
        for show in shows:
            generation.maybe_jingle(probabilities.jingle)
            generation.add_song(show)
            shows_since_news += 1

            generation.maybe_ad(config.include_ads, probabilities.talk_ad)

            if shows_since_news >= SHOWS_PER_NEWS and next_news < len(news):
                generation.add_song(news[next_news])
                next_news += 1
                shows_since_news = 0

        for bulletin in news[next_news:]:
            generation.add_song(bulletin)
