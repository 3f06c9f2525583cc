# pos_ledger/business_logic/entities/base_entity.py
from dataclasses import dataclass, field
from typing import Optional

# Fields flagged with this metadata are carried on the entity but stored in a child table.
NOT_PERSISTED = {"persist": False}


@dataclass(frozen=True)
class BaseEntity:
    id: Optional[int] = field(default=None, kw_only=True)  # kw_only=True makes it a keyword-only argument
