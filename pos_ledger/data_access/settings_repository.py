# pos_ledger/data_access/settings_repository.py

from typing import Dict, Any, Optional
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.setting_entity import SettingEntity, DATA_VERSION_KEY
import logging

logger = logging.getLogger(__name__)


class SettingsRepository:
    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.table_name = "settings"

    def _entity_from_row(self, row: Dict[str, Any]) -> SettingEntity:
        if row is None:
            raise ValueError("Input row cannot be None for SettingEntity")
        try:
            return SettingEntity(key=row['key'], value=row['value'])
        except KeyError as e:
            logger.error(f"KeyError when creating SettingEntity from row: {e}. Row: {row}")
            raise

    def get_setting(self, key: str) -> Optional[SettingEntity]:
        row = self.db_manager.fetch_one(f"SELECT * FROM {self.table_name} WHERE key = ?", (key,))
        return self._entity_from_row(dict(row)) if row else None

    def get_data_version(self) -> int:
        setting = self.get_setting(DATA_VERSION_KEY)
        return setting.as_int() if setting else 0

    def bump_data_version(self) -> int:
        """Increments the write counter in a single statement and returns the new value."""
        query = (f"INSERT INTO {self.table_name} (key, value) VALUES (?, '1') "
                 f"ON CONFLICT(key) DO UPDATE SET value = CAST(value AS INTEGER) + 1")
        self.db_manager.execute_query(query, (DATA_VERSION_KEY,))
        return self.get_data_version()
