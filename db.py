"""
db.py
SQLite-backed key-value store for society settings and the cached logo.

The store is an explicit object handed to whoever needs it; there is no
module-level instance.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from models import SocietySettings
from utils import validate_settings

logger = logging.getLogger(__name__)

DB_FILE = Path(__file__).with_name("society.db")

MAINTENANCE_AMOUNT_KEY = "maintenance_amount"
UPI_ID_KEY = "upi_id"
GUARD_MOBILE_KEY = "guard_mobile_number"
LOGO_KEY = "logo_data_url"


class SettingsStore:
    def __init__(self, db_file: str | Path = DB_FILE):
        self.db_file = Path(db_file)
        self._create_tables()
        logger.info("Settings store ready at %s", self.db_file)

    @contextmanager
    def get_conn(self):
        conn = sqlite3.connect(self.db_file, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _create_tables(self) -> None:
        with self.get_conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS app_settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str, default: str | None = None) -> str | None:
        with self.get_conn() as conn:
            row = conn.execute("SELECT value FROM app_settings WHERE key = ?", (key,)).fetchone()
        if row:
            return str(row["value"])
        return default

    def set(self, key: str, value: str) -> None:
        with self.get_conn() as conn:
            conn.execute(
                """
                INSERT INTO app_settings(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self.get_conn() as conn:
            conn.execute("DELETE FROM app_settings WHERE key = ?", (key,))


# ---------- Society settings ----------

def load_settings(store: SettingsStore) -> SocietySettings | None:
    """
    Returns None until the secretary has saved settings once.
    """
    amount = store.get(MAINTENANCE_AMOUNT_KEY)
    if amount is None:
        return None
    return SocietySettings(
        maintenance_amount=int(amount),
        upi_id=store.get(UPI_ID_KEY, ""),
        guard_mobile_number=store.get(GUARD_MOBILE_KEY, ""),
    )


def save_settings(store: SettingsStore, settings: SocietySettings) -> None:
    errors = validate_settings(
        str(settings.maintenance_amount), settings.upi_id, settings.guard_mobile_number
    )
    if errors:
        raise ValueError("Invalid settings: " + "; ".join(errors.values()))

    store.set(MAINTENANCE_AMOUNT_KEY, str(settings.maintenance_amount))
    store.set(UPI_ID_KEY, settings.upi_id.strip())
    store.set(GUARD_MOBILE_KEY, settings.guard_mobile_number.strip())
    logger.info("Society settings saved (maintenance amount %s)", settings.maintenance_amount)


# ---------- Logo cache ----------

def cache_logo(store: SettingsStore, data_url: str) -> None:
    store.set(LOGO_KEY, data_url)


def get_cached_logo(store: SettingsStore) -> str | None:
    return store.get(LOGO_KEY)


def clear_cached_logo(store: SettingsStore) -> None:
    store.delete(LOGO_KEY)
