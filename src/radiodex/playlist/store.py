"""SQLite storage for generated playlists."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import aiosqlite

from radiodex.models import Advertisement, Segment, Song
from radiodex.playlist.models import CatalogEntry, GeneratedPlaylist, ItemKind, PlaylistItem

logger = logging.getLogger(__name__)


def _decode_source(kind: ItemKind, data: str) -> CatalogEntry:
    payload = json.loads(data)
    if kind is ItemKind.SONG:
        return Song.from_dict(payload)
    if kind is ItemKind.AD:
        return Advertisement.from_dict(payload)
    return Segment.from_dict(payload)


class PlaylistStore:
    """Persists generated playlists so they can be listed and exported later."""

    def __init__(self, db_path: Path):
        """Initialize the playlist store.

        Args:
            db_path: Path to the SQLite database
        """
        self.db_path = db_path

    async def initialize(self) -> None:
        """Initialize the database schema."""
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS playlists (
                    id TEXT PRIMARY KEY,
                    station_key TEXT NOT NULL,
                    station_name TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    item_count INTEGER DEFAULT 0
                )
            """)

            await db.execute("""
                CREATE TABLE IF NOT EXISTS playlist_items (
                    playlist_id TEXT,
                    position INTEGER,
                    kind TEXT NOT NULL,
                    name TEXT NOT NULL,
                    path TEXT NOT NULL,
                    intro INTEGER DEFAULT 0,
                    outro INTEGER DEFAULT 0,
                    source TEXT NOT NULL,
                    PRIMARY KEY (playlist_id, position),
                    FOREIGN KEY (playlist_id) REFERENCES playlists(id)
                )
            """)

            await db.execute("CREATE INDEX IF NOT EXISTS idx_playlists_station ON playlists(station_key)")

            await db.commit()
            logger.info("Playlist database schema initialized")

    async def save_playlist(self, playlist: GeneratedPlaylist) -> str:
        """Store a generated playlist.

        Args:
            playlist: The playlist to store

        Returns:
            The playlist ID
        """
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                INSERT INTO playlists
                (id, station_key, station_name, created_at, item_count)
                VALUES (?, ?, ?, ?, ?)
            """, (
                playlist.id,
                playlist.station_key,
                playlist.station_name,
                playlist.created_at.isoformat(),
                len(playlist)
            ))

            await db.executemany("""
                INSERT INTO playlist_items
                (playlist_id, position, kind, name, path, intro, outro, source)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                (
                    playlist.id,
                    position,
                    item.kind.value,
                    item.name,
                    item.path,
                    item.intro,
                    item.outro,
                    json.dumps(item.source.to_dict())
                )
                for position, item in enumerate(playlist.items)
            ])

            await db.commit()
            logger.info(f"Saved playlist for {playlist.station_name} (ID: {playlist.id})")
            return playlist.id

    async def get_playlist(self, playlist_id: str) -> Optional[GeneratedPlaylist]:
        """Get a playlist by ID.

        Args:
            playlist_id: ID of the playlist to retrieve

        Returns:
            The playlist if found, None otherwise
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = sqlite3.Row

            async with db.execute(
                "SELECT * FROM playlists WHERE id = ?", (playlist_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if not row:
                    return None

            items = []
            async with db.execute("""
                SELECT * FROM playlist_items
                WHERE playlist_id = ?
                ORDER BY position
            """, (playlist_id,)) as items_cursor:
                async for item_row in items_cursor:
                    kind = ItemKind(item_row['kind'])
                    items.append(PlaylistItem(
                        kind=kind,
                        name=item_row['name'],
                        path=item_row['path'],
                        station_key=row['station_key'],
                        source=_decode_source(kind, item_row['source']),
                        intro=item_row['intro'],
                        outro=item_row['outro']
                    ))

            return GeneratedPlaylist(
                id=row['id'],
                station_key=row['station_key'],
                station_name=row['station_name'],
                items=tuple(items),
                created_at=datetime.fromisoformat(row['created_at'])
            )

    async def list_playlists(self, station_key: Optional[str] = None) -> List[dict]:
        """List stored playlists, newest first.

        Args:
            station_key: Only list playlists of this station

        Returns:
            Summary rows with id, station_key, station_name, created_at and item_count
        """
        query = "SELECT * FROM playlists"
        params: tuple = ()
        if station_key:
            query += " WHERE station_key = ?"
            params = (station_key,)
        query += " ORDER BY created_at DESC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = sqlite3.Row
            async with db.execute(query, params) as cursor:
                return [dict(row) async for row in cursor]

    async def delete_playlist(self, playlist_id: str) -> bool:
        """Delete a playlist and its items.

        Args:
            playlist_id: ID of the playlist to delete

        Returns:
            True if successful, False otherwise
        """
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute("SELECT id FROM playlists WHERE id = ?", (playlist_id,)) as cursor:
                if not await cursor.fetchone():
                    logger.error(f"Playlist not found: {playlist_id}")
                    return False

            await db.execute("DELETE FROM playlist_items WHERE playlist_id = ?", (playlist_id,))
            await db.execute("DELETE FROM playlists WHERE id = ?", (playlist_id,))
            await db.commit()
            logger.info(f"Deleted playlist: {playlist_id}")
            return True
