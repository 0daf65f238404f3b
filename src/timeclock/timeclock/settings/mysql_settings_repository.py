from __future__ import annotations

import json

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemSettings
from .repository import SettingsRepository

SETTINGS_KEY = "system"


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> SystemSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM system_settings WHERE setting_key=%s", (SETTINGS_KEY,))
            r = fetchone(cur)
            if not r:
                return SystemSettings()
            return SystemSettings.from_dict(json.loads(r["payload"]))

    def save(self, settings: SystemSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings (setting_key, payload)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (SETTINGS_KEY, json.dumps(settings.as_dict())),
            )
