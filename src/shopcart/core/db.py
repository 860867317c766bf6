"""
Database initialization and management utilities.
Handles the SQLite schema backing the durable key-value slots.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional, Union

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Database path (per-user data directory, outside the installed package)
DB_PATH = Path.home() / ".shopcart" / "shopcart.db"


def get_db_connection(db_path: Optional[Union[str, Path]] = None):
    """Get SQLite database connection."""
    path = Path(db_path or DB_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
        conn.row_factory = sqlite3.Row
        logger.debug(f"Connected to database: {path}")
        return conn
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


def init_database(db_path: Optional[Union[str, Path]] = None):
    """Initialize database schema."""
    conn = get_db_connection(db_path)
    cursor = conn.cursor()

    try:
        # Client-local key-value slots (the cart lives under one fixed key)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_storage (
                storage_key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        conn.commit()
        logger.info("Database schema created successfully")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    finally:
        conn.close()
