import asyncio
import logging
import random
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from radiodex.catalog import CatalogError, load_catalog
from radiodex.config import Config, ConfigError, GenerationConfig
from radiodex.models import Catalog
from radiodex.playlist.generator import PlaylistGenerator
from radiodex.playlist.m3u import M3UExporter
from radiodex.playlist.models import GeneratedPlaylist
from radiodex.playlist.resolver import PathResolver, RemoteQueryResolver
from radiodex.playlist.sequencer import PlaybackSession, Sequencer
from radiodex.playlist.store import PlaylistStore

console = Console()
logger = logging.getLogger(__name__)

def setup_logging(verbosity: int = 0, log_file: Optional[Path] = None):
    """Configure logging based on verbosity level."""
    log_level = logging.WARNING
    if verbosity == 1:
        log_level = logging.INFO
    elif verbosity >= 2:
        log_level = logging.DEBUG

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

def load_config(config_path: Path = None) -> Config:
    """Load configuration from standard locations or specified path."""
    if config_path and not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    config_locations = [
        config_path,
        Path.home() / '.config' / 'radiodex' / 'config.yml',
        Path.cwd() / 'config.yaml'
    ]

    for path in config_locations:
        if path and path.exists():
            config = Config.load_config(path)
            logger.info(f"Loaded configuration from {path}")
            return config

    logger.info("No configuration file found, using defaults")
    return Config()

def _load_catalog(config: Config, data: Optional[str], ads: Optional[str]) -> Catalog:
    data_path = Path(data) if data else config.data_path
    ads_path = Path(ads) if ads else config.ads_path
    if ads_path and not ads_path.exists() and not ads:
        logger.warning(f"Advertisement file {ads_path} not found, continuing without ads")
        ads_path = None
    return load_catalog(data_path, ads_path)

def _preview(playlist: GeneratedPlaylist):
    stats = playlist.stats()
    console.print(
        f"[bold]{playlist.station_name}[/bold]: {stats.songs} songs, {stats.jingles} jingles, "
        f"{stats.ads} ads, {stats.segments} segments"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Name")
    for index, item in enumerate(playlist, start=1):
        table.add_row(str(index), item.kind.value, item.name)
    console.print(table)

@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), help='Path to config.yaml')
@click.option('-v', '--verbose', count=True, help='Increase logging verbosity')
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: int):
    """Generate radio station playlists."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except (FileNotFoundError, ConfigError) as e:
        raise click.ClickException(str(e))

    setup_logging(verbose, config.log_file)
    ctx.obj = config

@cli.command()
@click.option('--data', type=click.Path(), help='Stations JSON file')
@click.option('--ads', type=click.Path(), help='Advertisements JSON file')
@click.option('--all', 'show_all', is_flag=True, help='Include talk radio stations')
@click.pass_obj
def stations(config: Config, data: Optional[str], ads: Optional[str], show_all: bool):
    """List the stations in the catalog."""
    try:
        catalog = _load_catalog(config, data, ads)
    except CatalogError as e:
        logger.error(f"Failed to load catalog: {e}")
        raise click.ClickException(str(e))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Songs", justify="right")
    table.add_column("Segments", justify="right")
    table.add_column("Talk")

    for station in catalog.stations:
        talk = station.key in config.talk_radio_keys
        if talk and not show_all:
            continue
        table.add_row(station.key, station.name, str(len(station.songs)),
                      str(station.segment_count()), "yes" if talk else "")
    console.print(table)

@cli.command()
@click.argument('station_key')
@click.option('--data', type=click.Path(), help='Stations JSON file')
@click.option('--ads', type=click.Path(), help='Advertisements JSON file')
@click.option('--no-ads', is_flag=True, help='Leave out advertisements')
@click.option('--no-weather', is_flag=True, help='Leave out weather reports')
@click.option('--no-bridges', is_flag=True, help='Leave out bridge announcements')
@click.option('--seed', type=int, help='Seed for a reproducible playlist')
@click.option('--output', '-o', type=click.Path(), help='Write the playlist as M3U to this file or directory')
@click.option('--base-path', help='Prefix for paths in the M3U file')
@click.option('--save', is_flag=True, help='Store the playlist in the playlist database')
@click.option('--quiet', '-q', is_flag=True, help='Do not print the preview')
@click.pass_obj
def generate(config: Config, station_key: str, data: Optional[str], ads: Optional[str],
             no_ads: bool, no_weather: bool, no_bridges: bool, seed: Optional[int],
             output: Optional[str], base_path: Optional[str], save: bool, quiet: bool):
    """Generate a playlist for STATION_KEY."""
    try:
        catalog = _load_catalog(config, data, ads)
    except CatalogError as e:
        logger.error(f"Failed to load catalog: {e}")
        raise click.ClickException(str(e))

    station = catalog.get_station(station_key)
    if station is None:
        raise click.ClickException(
            f"Unknown station '{station_key}'. Available: {', '.join(catalog.station_keys())}"
        )

    generation = GenerationConfig(
        include_ads=config.generation.include_ads and not no_ads,
        include_weather=config.generation.include_weather and not no_weather,
        include_bridges=config.generation.include_bridges and not no_bridges,
        probabilities=config.generation.probabilities
    )
    generator = PlaylistGenerator(
        rng=random.Random(seed),
        talk_radio_keys=config.talk_radio_keys,
        news_pattern=config.news_pattern
    )
    playlist = generator.generate(station, catalog.ads, generation)

    if not quiet:
        _preview(playlist)

    if output:
        exporter = M3UExporter(base_path if base_path is not None else config.base_path)
        if not exporter.write(playlist, Path(output)):
            raise click.ClickException(f"Failed to write playlist to {output}")

    if save:
        try:
            playlist_id = asyncio.run(_save(config.db_path, playlist))
        except Exception as e:
            logger.error(f"Error saving playlist: {e}")
            raise click.ClickException(str(e))
        console.print(f"Saved playlist {playlist_id}")

@cli.command()
@click.argument('station_key')
@click.option('--data', type=click.Path(), help='Stations JSON file')
@click.option('--ads', type=click.Path(), help='Advertisements JSON file')
@click.option('--count', '-n', type=int, default=10, show_default=True, help='Number of items to queue')
@click.option('--remote', is_flag=True, help='Print live playback queries instead of file paths')
@click.option('--seed', type=int, help='Seed for a reproducible queue')
@click.pass_obj
def queue(config: Config, station_key: str, data: Optional[str], ads: Optional[str],
          count: int, remote: bool, seed: Optional[int]):
    """Print the next COUNT playable items for STATION_KEY."""
    try:
        catalog = _load_catalog(config, data, ads)
    except CatalogError as e:
        logger.error(f"Failed to load catalog: {e}")
        raise click.ClickException(str(e))

    station = catalog.get_station(station_key)
    if station is None:
        raise click.ClickException(f"Unknown station '{station_key}'")

    generator = PlaylistGenerator(
        rng=random.Random(seed),
        talk_radio_keys=config.talk_radio_keys,
        news_pattern=config.news_pattern
    )
    sequencer = Sequencer(generator, config.end_of_list)
    resolver = RemoteQueryResolver(config.remote_base_url) if remote else PathResolver()
    session = PlaybackSession(station=station, ads=catalog.ads, config=config.generation)

    if sequencer.start(session) is None:
        console.print(f"{station.name} has nothing to play")
        return

    for _ in range(count):
        identifier = sequencer.resolve_current(session, resolver)
        if identifier is None:
            break
        click.echo(f"{session.index + 1:>4}  {identifier}")
        sequencer.next(session)

async def _save(db_path: Path, playlist: GeneratedPlaylist) -> str:
    store = PlaylistStore(db_path)
    await store.initialize()
    return await store.save_playlist(playlist)

async def _list(db_path: Path, station_key: Optional[str]):
    store = PlaylistStore(db_path)
    await store.initialize()
    return await store.list_playlists(station_key)

async def _get(db_path: Path, playlist_id: str) -> Optional[GeneratedPlaylist]:
    store = PlaylistStore(db_path)
    await store.initialize()
    return await store.get_playlist(playlist_id)

@cli.command()
@click.option('--station', 'station_key', help='Only list playlists of this station')
@click.pass_obj
def playlists(config: Config, station_key: Optional[str]):
    """List saved playlists."""
    rows = asyncio.run(_list(config.db_path, station_key))
    if not rows:
        console.print("No saved playlists")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID")
    table.add_column("Station")
    table.add_column("Created")
    table.add_column("Items", justify="right")
    for row in rows:
        table.add_row(row['id'], row['station_name'], row['created_at'], str(row['item_count']))
    console.print(table)

@cli.command()
@click.argument('playlist_id')
@click.argument('output', type=click.Path())
@click.option('--base-path', help='Prefix for paths in the M3U file')
@click.pass_obj
def export(config: Config, playlist_id: str, output: str, base_path: Optional[str]):
    """Write saved playlist PLAYLIST_ID as M3U to OUTPUT."""
    playlist = asyncio.run(_get(config.db_path, playlist_id))
    if playlist is None:
        raise click.ClickException(f"Playlist not found: {playlist_id}")

    exporter = M3UExporter(base_path if base_path is not None else config.base_path)
    if not exporter.write(playlist, Path(output)):
        raise click.ClickException(f"Failed to write playlist to {output}")
    console.print(f"Exported {len(playlist)} items to {output}")

if __name__ == "__main__":
    cli()
