from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

class SegmentType(Enum):
    STATION_JINGLE = "station_jingle"
    CALLER = "caller"
    WEATHER = "weather"
    BRIDGE_ANNOUNCEMENT = "bridge_announcement"
    DJ_TALK = "dj_talk"
    STORY = "story"

@dataclass(frozen=True)
class Song:
    artists: List[str] = field(hash=False)
    title: str
    intro_count: int = 0
    outro_count: int = 0

    @property
    def artist_line(self) -> str:
        return ", ".join(self.artists)

    @property
    def display_name(self) -> str:
        return f"{self.artist_line} - {self.title}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'artists': list(self.artists),
            'name': self.title,
            'intro_count': self.intro_count,
            'outro_count': self.outro_count
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Song':
        return cls(
            artists=list(data['artists']),
            title=data['name'],
            intro_count=int(data.get('intro_count', 0)),
            outro_count=int(data.get('outro_count', 0))
        )

@dataclass(frozen=True)
class Segment:
    title: str
    type: SegmentType

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.title, 'type': self.type.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Segment':
        return cls(title=data['name'], type=SegmentType(data['type']))

@dataclass(frozen=True)
class Advertisement:
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.title}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Advertisement':
        return cls(title=data['name'])

@dataclass
class Station:
    key: str
    name: str
    songs: List[Song] = field(default_factory=list)
    segments: Dict[SegmentType, List[Segment]] = field(default_factory=dict)

    def segments_of(self, segment_type: SegmentType) -> List[Segment]:
        """Segments of one type, empty when the station has none."""
        return self.segments.get(segment_type, [])

    def segment_count(self) -> int:
        return sum(len(segments) for segments in self.segments.values())

@dataclass
class Catalog:
    """Stations plus the advertisement pool shared by every station."""
    stations: List[Station] = field(default_factory=list)
    ads: List[Advertisement] = field(default_factory=list)

    def get_station(self, key: str) -> Optional[Station]:
        for station in self.stations:
            if station.key == key:
                return station
        logger.debug(f"Station not found in catalog: {key}")
        return None

    def station_keys(self) -> List[str]:
        return [station.key for station in self.stations]
