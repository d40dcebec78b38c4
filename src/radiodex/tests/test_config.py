"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from radiodex.config import Config, ConfigError, EndOfListPolicy, Probabilities


def test_defaults():
    config = Config()

    assert config.talk_radio_keys == ["wctr"]
    assert config.end_of_list is EndOfListPolicy.WRAP
    assert config.generation.include_ads is True
    assert config.generation.probabilities == Probabilities(jingle=0.7, ad=0.35, talk_ad=0.5)


def test_load_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({
        "data_path": "/srv/radio/data.json",
        "ads_path": "/srv/radio/ads.json",
        "base_path": "/music",
        "end_of_list": "regenerate",
        "talk_radio_keys": ["wctr", "chatterbox"],
        "generation": {"include_weather": False},
        "probabilities": {"ad": 0.2},
    }))

    config = Config.load_config(config_path)

    assert config.data_path == Path("/srv/radio/data.json")
    assert config.ads_path == Path("/srv/radio/ads.json")
    assert config.base_path == "/music"
    assert config.end_of_list is EndOfListPolicy.REGENERATE
    assert config.talk_radio_keys == ["wctr", "chatterbox"]
    assert config.generation.include_weather is False
    assert config.generation.include_bridges is True
    assert config.generation.probabilities.ad == 0.2
    assert config.generation.probabilities.jingle == 0.7


def test_empty_config_file_uses_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    config = Config.load_config(config_path)

    assert config.generation.probabilities == Probabilities()
    assert config.ads_path == Path("ads.json")


def test_empty_sections_use_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("generation:\nprobabilities:\ntalk_radio_keys:\n")

    config = Config.load_config(config_path)

    assert config.generation.include_ads is True
    assert config.generation.probabilities == Probabilities()
    assert config.talk_radio_keys == []


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("data", [
    {"probabilities": {"jingle": 1.5}},
    {"probabilities": {"talk_ad": -0.1}},
    {"end_of_list": "shuffle"},
    {"probabilities": {"ad": "often"}},
    {"talk_radio_keys": "wctr"},
    {"talk_radio_keys": ["wctr", 7]},
    {"generation": ["include_ads"]},
    ["data_path", "ads_path"],
])
def test_invalid_values(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data))

    with pytest.raises(ConfigError):
        Config.load_config(config_path)


def test_save_and_load(tmp_path):
    config = Config(base_path="/radio", end_of_list=EndOfListPolicy.REGENERATE)
    config.generation.include_ads = False
    config_path = tmp_path / "nested" / "config.yaml"

    config.save_config(config_path)
    loaded = Config.load_config(config_path)

    assert loaded.base_path == "/radio"
    assert loaded.end_of_list is EndOfListPolicy.REGENERATE
    assert loaded.generation.include_ads is False
    assert loaded.generation.probabilities == config.generation.probabilities
    assert loaded.db_path == config.db_path
    assert loaded.log_file is None
