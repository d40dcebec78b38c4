"""Catalog loading for radiodex.

Reads the station catalog and the shared advertisement list from their JSON
files and turns them into the data model in :mod:`radiodex.models`.

Station file layout::

    [
      {
        "key": "radio_los_santos",
        "name": "Radio Los Santos",
        "songs": [{"artists": ["2Pac"], "name": "I Don't Give A Fuck",
                   "intro_count": 2, "outro_count": 1}],
        "segments": {"station_jingle": [{"name": "Jingle 1"}]}
      }
    ]

Advertisement file layout::

    [{"name": "Ammu-Nation"}]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from radiodex.models import Advertisement, Catalog, Segment, SegmentType, Song, Station

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when catalog data is missing or malformed."""
    pass


def parse_song(data: Dict[str, Any], station_key: str) -> Song:
    """Build a song entry, validating artists and variant counts."""
    if not isinstance(data, dict):
        raise CatalogError(f"Invalid song in station {station_key}: {data!r}")

    artists = data.get('artists')
    if not isinstance(artists, list) or not all(isinstance(artist, str) for artist in artists):
        raise CatalogError(
            f"Song {data.get('name')!r} in station {station_key} needs a list of artist names"
        )

    try:
        song = Song.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid song in station {station_key}: {data!r} ({e})") from e

    if not song.artists:
        raise CatalogError(f"Song '{song.title}' in station {station_key} has no artists")
    if song.intro_count < 0 or song.outro_count < 0:
        raise CatalogError(
            f"Song '{song.title}' in station {station_key} has a negative variant count"
        )
    return song


def parse_segments(entries: Any, segment_type: SegmentType, station_key: str) -> List[Segment]:
    """Build the segment list of one category."""
    if not isinstance(entries, list):
        raise CatalogError(
            f"Segments '{segment_type.value}' in station {station_key} must be a list"
        )
    try:
        return [Segment(title=entry['name'], type=segment_type) for entry in entries]
    except (KeyError, TypeError) as e:
        raise CatalogError(
            f"Invalid '{segment_type.value}' segment in station {station_key} ({e!r})"
        ) from e


def parse_station(data: Dict[str, Any]) -> Station:
    """Build a station from its decoded JSON object."""
    if not isinstance(data, dict):
        raise CatalogError(f"Station entry must be an object, got {data!r}")
    try:
        key = data['key']
        name = data['name']
    except KeyError as e:
        raise CatalogError(f"Station entry missing field {e}") from e

    songs_data = data.get('songs') or []
    if not isinstance(songs_data, list):
        raise CatalogError(f"Songs of station {key} must be a list")
    songs = [parse_song(song_data, key) for song_data in songs_data]

    segments_data = data.get('segments') or {}
    if not isinstance(segments_data, dict):
        raise CatalogError(f"Segments of station {key} must be an object keyed by segment type")

    segments: Dict[SegmentType, List[Segment]] = {}
    for type_name, entries in segments_data.items():
        try:
            segment_type = SegmentType(type_name)
        except ValueError as e:
            raise CatalogError(f"Unknown segment type '{type_name}' in station {key}") from e
        segments[segment_type] = parse_segments(entries, segment_type, key)

    return Station(key=key, name=name, songs=songs, segments=segments)


def parse_catalog(stations_data: List[Dict[str, Any]],
                  ads_data: Optional[List[Dict[str, Any]]] = None) -> Catalog:
    """Build a catalog from already decoded station and ad lists."""
    if not isinstance(stations_data, list):
        raise CatalogError("Station catalog must be a list of stations")
    if ads_data is not None and not isinstance(ads_data, list):
        raise CatalogError("Advertisement catalog must be a list of ads")

    stations = []
    seen_keys = set()
    for station_data in stations_data:
        station = parse_station(station_data)
        if station.key in seen_keys:
            raise CatalogError(f"Duplicate station key: {station.key}")
        seen_keys.add(station.key)
        stations.append(station)

    try:
        ads = [Advertisement.from_dict(ad) for ad in (ads_data or [])]
    except (KeyError, TypeError) as e:
        raise CatalogError(f"Invalid advertisement entry ({e!r})") from e

    return Catalog(stations=stations, ads=ads)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Failed to parse {path}: {e}") from e


def load_catalog(data_path: Path, ads_path: Optional[Path] = None) -> Catalog:
    """Load the station catalog and, if given, the advertisement list.

    Args:
        data_path: Path to the stations JSON file
        ads_path: Path to the advertisements JSON file

    Returns:
        The loaded catalog
    """
    stations_data = _read_json(data_path)
    ads_data = _read_json(ads_path) if ads_path else []

    catalog = parse_catalog(stations_data, ads_data)
    logger.info(
        f"Loaded {len(catalog.stations)} stations and {len(catalog.ads)} ads from {data_path}"
    )
    return catalog
