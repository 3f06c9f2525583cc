# pos_ledger/business_logic/entities/setting_entity.py
from dataclasses import dataclass
from typing import Optional

# Settings key holding the store's write counter.
DATA_VERSION_KEY = "data_version"


@dataclass(frozen=True)
class SettingEntity:  # keyed by name, not by an integer id
    key: str
    value: Optional[str] = None

    def as_int(self, default: int = 0) -> int:
        try:
            return int(self.value)
        except (TypeError, ValueError):
            return default
