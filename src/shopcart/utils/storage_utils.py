"""
Storage utilities - durable client-local key-value slots.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..core.db import get_db_connection, init_database

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def save_slot(storage_key: str, value: str, db_path: Optional[Union[str, Path]] = None) -> bool:
    """
    Overwrite a key-value slot in persistent storage (SQLite database).

    Args:
        storage_key: Fixed namespace string of the slot
        value: Serialized (JSON) content to store
        db_path: Optional database file, defaults to DB_PATH

    Returns:
        True if successful, False otherwise
    """
    try:
        conn = get_db_connection(db_path)
        try:
            conn.execute("""
                INSERT INTO kv_storage (storage_key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(storage_key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (storage_key, value))
            conn.commit()
        finally:
            conn.close()

        logger.debug(f"[STORAGE] Saved slot {storage_key} ({len(value)} bytes)")
        return True

    except Exception as e:
        logger.error(f"[STORAGE] Failed to save slot {storage_key}: {e}", exc_info=True)
        return False


def load_slot(storage_key: str, db_path: Optional[Union[str, Path]] = None) -> Optional[str]:
    """
    Load a key-value slot from persistent storage.

    Returns:
        Stored string, or None when the slot is absent or unreadable
    """
    try:
        conn = get_db_connection(db_path)
        try:
            row = conn.execute(
                "SELECT value FROM kv_storage WHERE storage_key = ?", (storage_key,)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            logger.info(f"[STORAGE] Slot {storage_key} is empty")
            return None
        return row["value"]

    except Exception as e:
        logger.error(f"[STORAGE] Failed to load slot {storage_key}: {e}", exc_info=True)
        return None


def clear_slot(storage_key: str, db_path: Optional[Union[str, Path]] = None) -> bool:
    """Delete a key-value slot. Returns True if successful."""
    try:
        conn = get_db_connection(db_path)
        try:
            conn.execute("DELETE FROM kv_storage WHERE storage_key = ?", (storage_key,))
            conn.commit()
        finally:
            conn.close()

        logger.info(f"[STORAGE] Cleared slot {storage_key}")
        return True

    except Exception as e:
        logger.error(f"[STORAGE] Failed to clear slot {storage_key}: {e}", exc_info=True)
        return False


class KeyValueStorage:
    """Durable string slots addressed by key."""

    def read(self, storage_key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, storage_key: str, value: str) -> bool:
        raise NotImplementedError


class SQLiteStorage(KeyValueStorage):
    """Slots kept in the kv_storage table."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = db_path
        try:
            init_database(db_path)
        except Exception as e:
            # reads come back empty and writes report False until the file is reachable
            logger.warning(f"[STORAGE] Storage unavailable at {db_path or 'default path'}: {e}")

    def read(self, storage_key: str) -> Optional[str]:
        return load_slot(storage_key, self.db_path)

    def write(self, storage_key: str, value: str) -> bool:
        return save_slot(storage_key, value, self.db_path)


class InMemoryStorage(KeyValueStorage):
    """Process-local slots, for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def read(self, storage_key: str) -> Optional[str]:
        return self.slots.get(storage_key)

    def write(self, storage_key: str, value: str) -> bool:
        self.slots[storage_key] = value
        return True
