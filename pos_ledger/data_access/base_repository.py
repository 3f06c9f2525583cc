# pos_ledger/data_access/base_repository.py

from dataclasses import fields, replace, MISSING
from datetime import date, datetime
from enum import Enum
from typing import Generic, TypeVar, Type, List, Optional, Dict, Any, Tuple, Union, get_type_hints
import logging

from pos_ledger.business_logic.entities.base_entity import BaseEntity
from pos_ledger.data_access.database_manager import DatabaseManager

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseEntity)


def _unwrap_optional(field_type: Any) -> Any:
    if getattr(field_type, '__origin__', None) is Union:
        possible_types = [arg for arg in getattr(field_type, '__args__', ()) if arg is not type(None)]
        if possible_types:
            return possible_types[0]
    return field_type


class BaseRepository(Generic[T]):
    """
    Maps one frozen entity dataclass onto one table.

    Columns are the dataclass init fields except `id` and any field whose metadata
    carries persist=False (child collections stored in their own table).
    Entities are immutable, so add() returns a copy carrying the new row id.
    """

    def __init__(self, db_manager: DatabaseManager, model_type: Type[T], table_name: str):
        self.db_manager = db_manager
        self.model_type = model_type
        self._table_name = table_name
        self._field_types = get_type_hints(model_type)
        self._db_columns = [
            f.name for f in fields(model_type)
            if f.init and f.name != 'id' and f.metadata.get('persist', True)
        ]
        logger.debug(f"BaseRepository for {self._table_name} initialized. Columns: {self._db_columns}")

    @property
    def table_name(self) -> str:
        return self._table_name

    def _entity_to_dict_for_db(self, entity: T) -> Dict[str, Any]:
        data_to_persist = {}
        for column in self._db_columns:
            value = getattr(entity, column)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, bool):
                value = 1 if value else 0
            elif isinstance(value, (datetime, date)):
                value = value.isoformat()
            data_to_persist[column] = value
        return data_to_persist

    def _entity_from_row(self, row: Dict[str, Any]) -> T:
        entity_data: Dict[str, Any] = {}

        for f in fields(self.model_type):
            if not f.init or not f.metadata.get('persist', True):
                continue

            field_name = f.name
            value_from_db = row.get(field_name)

            if value_from_db is None:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise ValueError(
                        f"Database integrity error: NULL value found for required field '{field_name}' "
                        f"in table '{self._table_name}' for row: {row}"
                    )
                if f.default is None:
                    entity_data[field_name] = None
                continue

            actual_type = _unwrap_optional(self._field_types.get(field_name))
            is_enum = isinstance(actual_type, type) and issubclass(actual_type, Enum)

            if is_enum:
                entity_data[field_name] = actual_type(value_from_db)
            elif actual_type is datetime and isinstance(value_from_db, str):
                entity_data[field_name] = datetime.fromisoformat(value_from_db)
            elif actual_type is date and isinstance(value_from_db, str):
                entity_data[field_name] = date.fromisoformat(value_from_db[:10])
            elif actual_type is bool:
                entity_data[field_name] = bool(value_from_db)
            elif actual_type is float:
                entity_data[field_name] = float(value_from_db)
            else:
                entity_data[field_name] = value_from_db

        try:
            return self.model_type(**entity_data)
        except TypeError as e:
            logger.error(f"Failed to instantiate {self.model_type.__name__}. Error: {e}. Data passed: {entity_data}")
            raise

    def insert_statement(self, entity: T) -> Tuple[str, Tuple[Any, ...]]:
        """INSERT query and parameters, for callers that batch several writes in one transaction."""
        fields_to_insert = self._entity_to_dict_for_db(entity)
        columns = ', '.join(fields_to_insert.keys())
        placeholders = ', '.join(['?'] * len(fields_to_insert))
        query = f"INSERT INTO {self._table_name} ({columns}) VALUES ({placeholders})"
        return query, tuple(fields_to_insert.values())

    def update_statement(self, entity: T) -> Tuple[str, Tuple[Any, ...]]:
        if entity.id is None:
            raise ValueError(f"Entity of type {type(entity).__name__} must have an ID to be updated.")
        fields_to_update = self._entity_to_dict_for_db(entity)
        set_clause = ', '.join(f"{key} = ?" for key in fields_to_update)
        query = f"UPDATE {self._table_name} SET {set_clause} WHERE id = ?"
        return query, tuple(fields_to_update.values()) + (entity.id,)

    def add(self, entity: T) -> T:
        cursor = self.db_manager.execute_query(*self.insert_statement(entity))
        stored = replace(entity, id=cursor.lastrowid)
        logger.debug(f"BaseRepository.add: {type(entity).__name__} stored with ID {stored.id} in '{self._table_name}'.")
        return stored

    def update(self, entity: T) -> T:
        cursor = self.db_manager.execute_query(*self.update_statement(entity))
        if cursor.rowcount == 0:
            raise ValueError(f"{type(entity).__name__} with ID {entity.id} does not exist in '{self._table_name}'.")
        logger.info(f"BaseRepository.update: Entity ID {entity.id} in table {self._table_name} updated.")
        return entity

    def delete(self, entity_id: int) -> bool:
        cursor = self.db_manager.execute_query(f"DELETE FROM {self._table_name} WHERE id = ?", (entity_id,))
        if cursor.rowcount == 0:
            logger.warning(f"BaseRepository.delete: ID {entity_id} not found in '{self._table_name}'.")
            return False
        return True

    def get_by_id(self, entity_id: int) -> Optional[T]:
        row = self.db_manager.fetch_one(f"SELECT * FROM {self._table_name} WHERE id = ?", (entity_id,))
        return self._entity_from_row(dict(row)) if row else None

    def get_all(self, order_by: Optional[str] = "id") -> List[T]:
        query = f"SELECT * FROM {self._table_name}"
        if order_by:
            query += f" ORDER BY {order_by}"
        return [self._entity_from_row(dict(row)) for row in self.db_manager.fetch_all(query)]

    def find_by_criteria(self, criteria: Dict[str, Any], order_by: Optional[str] = "id") -> List[T]:
        """
        criteria values are either plain values (equality) or (operator, value) tuples,
        e.g. {"date": (">=", "2024-01-01")} or {"amount": ("BETWEEN", (10, 20))}.
        """
        if not criteria:
            return self.get_all(order_by=order_by)

        conditions = []
        params: List[Any] = []
        for key, value in criteria.items():
            if isinstance(value, tuple) and len(value) == 2:
                operator, val = value
                if str(operator).upper() == 'BETWEEN' and isinstance(val, (list, tuple)) and len(val) == 2:
                    conditions.append(f"{key} BETWEEN ? AND ?")
                    params.extend(val)
                else:
                    conditions.append(f"{key} {operator} ?")
                    params.append(val)
            else:
                conditions.append(f"{key} = ?")
                params.append(value.value if isinstance(value, Enum) else value)

        query = f"SELECT * FROM {self._table_name} WHERE " + " AND ".join(conditions)
        if order_by:
            query += f" ORDER BY {order_by}"

        logger.debug(f"BaseRepository.find_by_criteria: Query: {query}, Values: {tuple(params)}")
        return [self._entity_from_row(dict(row)) for row in self.db_manager.fetch_all(query, tuple(params))]
