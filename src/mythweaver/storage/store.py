"""Campaign stores: the key-value persistence the engine is handed.

A store keeps the whole ordered campaign list and exposes two calls,
``load()`` and ``save(campaigns)``. Loading never fails: unreadable data is
logged and replaced by an empty list.

Two implementations are provided:

- ``InMemoryCampaignStore`` keeps one serialized JSON document, the way a
  browser keeps it under a single localStorage key.
- ``SqliteCampaignStore`` keeps one JSON row per campaign in SQLite.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from mythweaver.core.config import StorageSettings
from mythweaver.core.exceptions import MalformedStateError, StorageError
from mythweaver.core.logging import get_logger
from mythweaver.models.campaign import Campaign


logger = get_logger(__name__)

_CAMPAIGN_LIST = TypeAdapter(list[Campaign])


def encode_campaigns(campaigns: Sequence[Campaign]) -> str:
    """Serialize an ordered campaign list to JSON."""
    return _CAMPAIGN_LIST.dump_json(list(campaigns)).decode("utf-8")


def decode_campaigns(payload: str | bytes) -> list[Campaign]:
    """Parse a JSON campaign list.

    Raises:
        MalformedStateError: If the payload is not a valid campaign list.
    """
    try:
        return _CAMPAIGN_LIST.validate_json(payload)
    except PydanticValidationError as exc:
        raise MalformedStateError(
            "Persisted campaigns could not be parsed",
            details={"errors": exc.error_count()},
        ) from exc


class CampaignStore(Protocol):
    """Persistence the engine depends on."""

    def load(self) -> list[Campaign]: ...

    def save(self, campaigns: Sequence[Campaign]) -> None: ...


# =============================================================================
# In-memory store
# =============================================================================


class InMemoryCampaignStore:
    """Holds the campaign list as one JSON document.

    Args:
        payload: Initial serialized document, None for an empty store.
    """

    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload

    def load(self) -> list[Campaign]:
        if not self.payload:
            return []
        try:
            return decode_campaigns(self.payload)
        except MalformedStateError as exc:
            logger.warning("Discarding malformed campaign data", error=str(exc))
            return []

    def save(self, campaigns: Sequence[Campaign]) -> None:
        self.payload = encode_campaigns(campaigns)


# =============================================================================
# SQLite store
# =============================================================================


class SqliteCampaignStore:
    """One row per campaign, ordered by its position in the list.

    Args:
        db_path: Path to the database file; parent directories are created.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._init_schema()
        except sqlite3.DatabaseError as exc:
            # load() will come back empty and save() will raise StorageError
            logger.warning("Campaign store schema unavailable", path=str(self.db_path), error=str(exc))
            return
        logger.info("Campaign store initialized", path=str(self.db_path))

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> SqliteCampaignStore:
        """Open the store at the configured ``database_path``."""
        return cls(settings.database_path)

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with commit/rollback and cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS campaigns (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    payload TEXT NOT NULL,
                    last_played TEXT NOT NULL
                )
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    def load(self) -> list[Campaign]:
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT id, payload FROM campaigns ORDER BY position"
                ).fetchall()
        except sqlite3.DatabaseError as exc:
            logger.warning("Campaign store unreadable", path=str(self.db_path), error=str(exc))
            return []

        campaigns: list[Campaign] = []
        for row_id, payload in rows:
            try:
                campaigns.append(Campaign.model_validate_json(payload))
            except PydanticValidationError as exc:
                logger.warning(
                    "Discarding malformed campaign data",
                    error=str(MalformedStateError("Row could not be parsed", source=row_id)),
                    errors=exc.error_count(),
                )
                return []
        return campaigns

    def save(self, campaigns: Sequence[Campaign]) -> None:
        """Replace the stored list.

        Raises:
            StorageError: If the database cannot be written.
        """
        try:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM campaigns")
                conn.executemany(
                    """
                    INSERT INTO campaigns (id, position, name, payload, last_played)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [
                        (c.id, position, c.name, c.model_dump_json(), c.last_played.isoformat())
                        for position, c in enumerate(campaigns)
                    ],
                )
        except sqlite3.Error as exc:
            raise StorageError(
                f"Failed to save campaigns: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        logger.debug("Campaigns saved", count=len(campaigns))


__all__ = [
    "CampaignStore",
    "InMemoryCampaignStore",
    "SqliteCampaignStore",
    "encode_campaigns",
    "decode_campaigns",
]
