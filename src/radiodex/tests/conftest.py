"""Shared fixtures for radiodex tests."""

import json
import random
from pathlib import Path
from typing import List

import pytest

from radiodex.config import GenerationConfig, Probabilities
from radiodex.models import Advertisement, Segment, SegmentType, Song, Station


def make_segments(segment_type: SegmentType, *titles: str) -> List[Segment]:
    return [Segment(title=title, type=segment_type) for title in titles]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1992)


@pytest.fixture
def music_station() -> Station:
    """A music station with every segment category populated."""
    return Station(
        key="radio_los_santos",
        name="Radio Los Santos",
        songs=[
            Song(artists=["Dr. Dre", "Snoop Dogg"], title="Nuthin' But A 'G' Thang", intro_count=2, outro_count=1),
            Song(artists=["Ice Cube"], title="It Was A Good Day", intro_count=1, outro_count=0),
            Song(artists=["Eazy-E"], title="Eazy-Er Said Than Dunn"),
            Song(artists=["Compton's Most Wanted"], title="Hood Took Me Under", intro_count=3, outro_count=2),
            Song(artists=["Kid Frost"], title="La Raza", intro_count=0, outro_count=1),
        ],
        segments={
            SegmentType.STATION_JINGLE: make_segments(SegmentType.STATION_JINGLE, "Jingle 1", "Jingle 2", "Jingle 3"),
            SegmentType.CALLER: make_segments(SegmentType.CALLER, "Caller 1", "Caller 2"),
            SegmentType.WEATHER: make_segments(SegmentType.WEATHER, "Sunny", "Foggy"),
            SegmentType.BRIDGE_ANNOUNCEMENT: make_segments(SegmentType.BRIDGE_ANNOUNCEMENT, "Bridges Open"),
            SegmentType.DJ_TALK: make_segments(SegmentType.DJ_TALK, "Julio G 1", "Julio G 2"),
            SegmentType.STORY: make_segments(SegmentType.STORY, "Grove Street"),
        }
    )


@pytest.fixture
def talk_station() -> Station:
    """A talk radio station with episodic shows and news bulletins."""
    titles = [
        "Entertaining America #1",
        "Gardening with Maurice #1",
        "Lonely Hearts Show #2",
        "The Tight End Zone #2",
        "Area 53 #3",
        "Entertaining America #3",
        "WCTR Special",
        "News #1",
        "News #2",
        "Evening News #3",
        "News Flash",
    ]
    return Station(
        key="wctr",
        name="West Coast Talk Radio",
        songs=[Song(artists=["WCTR"], title=title) for title in titles],
        segments={
            SegmentType.STATION_JINGLE: make_segments(SegmentType.STATION_JINGLE, "WCTR ID 1", "WCTR ID 2"),
        }
    )


@pytest.fixture
def ads() -> List[Advertisement]:
    return [
        Advertisement(title="Ammu-Nation"),
        Advertisement(title="Cluckin' Bell"),
        Advertisement(title="Burger Shot"),
        Advertisement(title="Zip"),
    ]


@pytest.fixture
def always_config() -> GenerationConfig:
    """Every optional category enabled and every coin flip succeeding."""
    return GenerationConfig(probabilities=Probabilities(jingle=1.0, ad=1.0, talk_ad=1.0))


@pytest.fixture
def never_config() -> GenerationConfig:
    """Every coin flip failing."""
    return GenerationConfig(probabilities=Probabilities(jingle=0.0, ad=0.0, talk_ad=0.0))


@pytest.fixture
def catalog_files(tmp_path: Path, music_station: Station, talk_station: Station, ads) -> Path:
    """Write the sample stations and ads as catalog JSON files."""
    def station_json(station: Station) -> dict:
        return {
            "key": station.key,
            "name": station.name,
            "songs": [song.to_dict() for song in station.songs],
            "segments": {
                segment_type.value: [{"name": segment.title} for segment in segments]
                for segment_type, segments in station.segments.items()
            }
        }

    (tmp_path / "data.json").write_text(json.dumps([station_json(music_station), station_json(talk_station)]))
    (tmp_path / "ads.json").write_text(json.dumps([ad.to_dict() for ad in ads]))
    return tmp_path
