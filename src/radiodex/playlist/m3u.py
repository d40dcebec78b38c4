"""Extended M3U export for generated playlists.

The written file looks like::

    #EXTM3U
    #PLAYLIST:Radio Los Santos

    #EXTINF:-1,Dr. Dre, Snoop Dogg - Nuthin' But A 'G' Thang
    /music/gtasa/songs/Radio Los Santos/Dr. Dre, Snoop Dogg - Nuthin' But A 'G' Thang (Intro 1, Outro 2).mp3
"""

import logging
import re
from pathlib import Path

from radiodex.playlist.models import GeneratedPlaylist

logger = logging.getLogger(__name__)


def normalize_base_path(base_path: str) -> str:
    base_path = (base_path or '').strip()
    if base_path and not base_path.endswith('/'):
        base_path += '/'
    return base_path


def suggested_filename(playlist: GeneratedPlaylist) -> str:
    """File name for a playlist, e.g. ``Radio_Los_Santos.m3u``."""
    return re.sub(r'\s+', '_', playlist.station_name) + '.m3u'


class M3UExporter:
    """Writer for extended M3U playlists."""

    def __init__(self, base_path: str = ''):
        """Initialize the exporter.

        Args:
            base_path: Prefix prepended to every item path
        """
        self.base_path = normalize_base_path(base_path)

    def render(self, playlist: GeneratedPlaylist) -> str:
        lines = ['#EXTM3U', f'#PLAYLIST:{playlist.station_name}', '']
        for item in playlist:
            lines.append(f'#EXTINF:-1,{item.name}')
            lines.append(f'{self.base_path}{item.path}')
        return '\n'.join(lines) + '\n'

    def write(self, playlist: GeneratedPlaylist, output_path: Path) -> bool:
        """Write the playlist to disk.

        Args:
            playlist: Playlist to export
            output_path: Target file, or a directory to place the suggested file name in

        Returns:
            True if successful, False otherwise
        """
        if output_path.is_dir():
            output_path = output_path / suggested_filename(playlist)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self.render(playlist))
        except OSError as e:
            logger.error(f"Error writing M3U playlist to {output_path}: {e}")
            return False

        logger.info(f"Wrote {len(playlist)} items to {output_path}")
        return True
