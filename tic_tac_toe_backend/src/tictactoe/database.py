"""
Persistence collaborators for scores, game history, player names and the
sound preference.

Storage is best-effort: every failure is logged here and turned into
"nothing saved" on read or a dropped write, so callers never see an error.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import asyncpg
from pydantic import TypeAdapter

from . import config
from .models import HistoryEntry, Names, Scores

logger = logging.getLogger(__name__)

SCORES_KEY = "scores"
HISTORY_KEY = "game_history"
NAMES_KEY = "player_names"
SOUND_KEY = "sound_enabled"

_scores = TypeAdapter(Scores)
_history = TypeAdapter(List[HistoryEntry])
_names = TypeAdapter(Names)
_sound = TypeAdapter(bool)


# PUBLIC_INTERFACE
class Store:
    """Base persistence collaborator. Subclasses implement `_read` and `_write`."""

    async def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def _load(self, key: str, adapter: TypeAdapter) -> Any:
        try:
            raw = await self._read(key)
            if raw is None:
                return None
            return adapter.validate_json(raw)
        except Exception:
            logger.exception("Failed to load %r, falling back to defaults", key)
            return None

    async def _save(self, key: str, adapter: TypeAdapter, value: Any) -> None:
        try:
            await self._write(key, adapter.dump_json(value).decode())
        except Exception:
            logger.exception("Failed to save %r, keeping in-memory state only", key)

    async def load_scores(self) -> Optional[Scores]:
        return await self._load(SCORES_KEY, _scores)

    async def save_scores(self, scores: Scores) -> None:
        await self._save(SCORES_KEY, _scores, scores)

    async def load_history(self) -> Optional[List[HistoryEntry]]:
        return await self._load(HISTORY_KEY, _history)

    async def save_history(self, history: List[HistoryEntry]) -> None:
        await self._save(HISTORY_KEY, _history, history)

    async def load_names(self) -> Optional[Names]:
        return await self._load(NAMES_KEY, _names)

    async def save_names(self, x_name: str, o_name: str) -> None:
        await self._save(NAMES_KEY, _names, Names(x_name=x_name, o_name=o_name))

    async def load_sound_preference(self) -> Optional[bool]:
        return await self._load(SOUND_KEY, _sound)

    async def save_sound_preference(self, enabled: bool) -> None:
        await self._save(SOUND_KEY, _sound, enabled)

    async def close(self) -> None:
        pass


# PUBLIC_INTERFACE
class MemoryStore(Store):
    """Keeps serialized values in a dict for the lifetime of the process."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = data if data is not None else {}

    async def _read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def _write(self, key: str, value: str) -> None:
        self.data[key] = value


# PUBLIC_INTERFACE
class PostgresStore(Store):
    """Key/value rows in PostgreSQL through an asyncpg connection pool."""

    def __init__(self, dsn: Optional[str] = None):
        self.dsn = dsn or config.DSN
        self._pool: Optional[asyncpg.pool.Pool] = None

    async def get_pool(self) -> asyncpg.pool.Pool:
        if self._pool is None:
            self._pool = await asyncpg.create_pool(dsn=self.dsn, min_size=1, max_size=10)
            async with self._pool.acquire() as conn:
                await conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
        return self._pool

    @asynccontextmanager
    async def connect(self):
        pool = await self.get_pool()
        async with pool.acquire() as conn:
            yield conn

    async def _read(self, key: str) -> Optional[str]:
        async with self.connect() as conn:
            return await conn.fetchval("SELECT value FROM kv_store WHERE key = $1", key)

    async def _write(self, key: str, value: str) -> None:
        async with self.connect() as conn:
            await conn.execute(
                """INSERT INTO kv_store (key, value) VALUES ($1, $2)
                   ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value""",
                key, value)

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None


def create_store(kind: Optional[str] = None) -> Store:
    kind = kind or config.STORE
    if kind == "postgres":
        return PostgresStore()
    if kind != "memory":
        logger.warning("Unknown store %r, using in-memory storage", kind)
    return MemoryStore()
