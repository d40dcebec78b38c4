"""Tests for the command line interface."""

import pytest
import yaml
from click.testing import CliRunner

from radiodex.cli import commands
from radiodex.cli.commands import cli


@pytest.fixture
def config_file(catalog_files):
    """Config pointing at the sample catalog and a temp playlist database."""
    path = catalog_files / "config.yaml"
    path.write_text(yaml.dump({
        "data_path": str(catalog_files / "data.json"),
        "ads_path": str(catalog_files / "ads.json"),
        "db_path": str(catalog_files / "playlists.db"),
        "base_path": "/music/gtasa",
    }))
    return path


@pytest.fixture
def runner(monkeypatch):
    # Wide enough that rich tables never wrap cell text
    monkeypatch.setattr(commands.console, "width", 200)
    return CliRunner()


def test_stations_hides_talk_radio(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "stations"])

    assert result.exit_code == 0, result.output
    assert "radio_los_santos" in result.output
    assert "wctr" not in result.output


def test_stations_all(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "stations", "--all"])

    assert result.exit_code == 0, result.output
    assert "wctr" in result.output


def test_generate_writes_m3u(runner, config_file, catalog_files):
    output = catalog_files / "out.m3u"

    result = runner.invoke(cli, [
        "--config", str(config_file), "generate", "radio_los_santos",
        "--seed", "7", "--output", str(output), "--quiet"
    ])

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[:2] == ["#EXTM3U", "#PLAYLIST:Radio Los Santos"]
    paths = [line for line in lines if line and not line.startswith("#")]
    assert all(path.startswith("/music/gtasa/") for path in paths)


def test_generate_is_reproducible_with_seed(runner, config_file, catalog_files):
    outputs = []
    for name in ("a.m3u", "b.m3u"):
        output = catalog_files / name
        result = runner.invoke(cli, [
            "--config", str(config_file), "generate", "radio_los_santos",
            "--seed", "42", "-o", str(output), "-q"
        ])
        assert result.exit_code == 0, result.output
        outputs.append(output.read_text(encoding="utf-8"))

    assert outputs[0] == outputs[1]


def test_generate_without_ads(runner, config_file, catalog_files):
    output = catalog_files / "no_ads.m3u"

    result = runner.invoke(cli, [
        "--config", str(config_file), "generate", "radio_los_santos",
        "--no-ads", "-o", str(output), "-q"
    ])

    assert result.exit_code == 0, result.output
    assert "advertisements/" not in output.read_text(encoding="utf-8")


def test_generate_preview(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "generate", "wctr", "--seed", "1"])

    assert result.exit_code == 0, result.output
    assert "West Coast Talk Radio" in result.output
    assert "11 songs" in result.output


def test_generate_unknown_station(runner, config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "generate", "radio_x"])

    assert result.exit_code == 1
    assert "Unknown station" in result.output


def test_missing_config_file(runner, tmp_path):
    result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), "stations"])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_empty_config_sections(runner, config_file):
    with open(config_file, "a") as f:
        f.write("generation:\nprobabilities:\n")

    result = runner.invoke(cli, ["--config", str(config_file), "stations"])

    assert result.exit_code == 0, result.output
    assert "radio_los_santos" in result.output


def test_save_list_and_export(runner, config_file, catalog_files):
    result = runner.invoke(cli, [
        "--config", str(config_file), "generate", "radio_los_santos", "--save", "-q"
    ])
    assert result.exit_code == 0, result.output
    playlist_id = result.output.strip().split()[-1]

    result = runner.invoke(cli, ["--config", str(config_file), "playlists"])
    assert result.exit_code == 0, result.output
    assert "Radio Los Santos" in result.output

    output = catalog_files / "saved.m3u"
    result = runner.invoke(cli, ["--config", str(config_file), "export", playlist_id, str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").startswith("#EXTM3U\n#PLAYLIST:Radio Los Santos\n")


def test_export_unknown_playlist(runner, config_file, catalog_files):
    result = runner.invoke(cli, [
        "--config", str(config_file), "export", "missing", str(catalog_files / "x.m3u")
    ])

    assert result.exit_code == 1
    assert "Playlist not found" in result.output


def test_queue_prints_paths(runner, config_file):
    result = runner.invoke(cli, [
        "--config", str(config_file), "queue", "radio_los_santos", "-n", "25", "--seed", "3"
    ])

    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if line.strip()]
    assert len(lines) == 25


def test_queue_remote(runner, config_file):
    result = runner.invoke(cli, [
        "--config", str(config_file), "queue", "radio_los_santos", "-n", "3", "--remote"
    ])

    assert result.exit_code == 0, result.output
    assert "/api/play/" in result.output
