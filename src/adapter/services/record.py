"""
Safe Field Reader

``Record`` wraps one row from a DBAPI cursor and reads columns by name,
tolerating SQL NULL. Each type has a total reader (``get_x``) that falls back
to a default and a nullable reader (``get_nullable_x``) that returns None.

Total integer readers are strict: a missing column or a value that is not
an integer raises MappingError, so an identifier can never silently turn
into 0 because of a typo'd column name. Every other reader degrades to its
default.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Sequence
from uuid import UUID

from src.app.services.errors import MappingError

EMPTY_UUID = UUID(int=0)

_MISSING = object()


class Record:
    def __init__(self, columns: Dict[str, int], row: Sequence[Any]):
        self._columns = columns
        self._row = row

    @staticmethod
    def column_index(description) -> Dict[str, int]:
        """Build a case-insensitive name -> ordinal map from cursor.description."""
        index: Dict[str, int] = {}
        for ordinal, column in enumerate(description or ()):
            index.setdefault(column[0].lower(), ordinal)
        return index

    def has_column(self, column: str) -> bool:
        return column.lower() in self._columns

    def _raw(self, column: str) -> Any:
        ordinal = self._columns.get(column.lower())
        if ordinal is None:
            return _MISSING
        return self._row[ordinal]

    def get_value(self, column: str) -> Any:
        """Driver-native value, None for NULL or a missing column."""
        value = self._raw(column)
        return None if value is _MISSING else value

    def as_dict(self) -> Dict[str, Any]:
        return {name: self._row[ordinal] for name, ordinal in self._columns.items()}

    # Integer types

    def _strict_int(self, column: str, type_name: str) -> int:
        value = self._raw(column)
        if value is _MISSING:
            raise MappingError(column, f"Column '{column}' does not exist in the result set.")
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise MappingError(column, f"Cannot convert column '{column}' to {type_name}.")
        return value

    def _lenient_int(self, column: str) -> Optional[int]:
        value = self._raw(column)
        if value is _MISSING or value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_int32(self, column: str) -> int:
        return self._strict_int(column, "Int32")

    def get_nullable_int32(self, column: str) -> Optional[int]:
        return self._lenient_int(column)

    def get_int16(self, column: str) -> int:
        return self._strict_int(column, "Int16")

    def get_nullable_int16(self, column: str) -> Optional[int]:
        return self._lenient_int(column)

    def get_int64(self, column: str) -> int:
        return self._strict_int(column, "Int64")

    def get_nullable_int64(self, column: str) -> Optional[int]:
        return self._lenient_int(column)

    def get_byte(self, column: str) -> int:
        return self._strict_int(column, "Byte")

    def get_nullable_byte(self, column: str) -> Optional[int]:
        return self._lenient_int(column)

    # String types

    def get_string(self, column: str) -> str:
        value = self.get_nullable_string(column)
        return "" if value is None else value

    def get_nullable_string(self, column: str) -> Optional[str]:
        value = self._raw(column)
        if value is _MISSING or value is None:
            return None
        return value if isinstance(value, str) else None

    # Boolean types

    def get_bool(self, column: str) -> bool:
        value = self.get_nullable_bool(column)
        return False if value is None else value

    def get_nullable_bool(self, column: str) -> Optional[bool]:
        value = self._raw(column)
        if value is _MISSING or value is None:
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        return None

    # DateTime types

    def get_datetime(self, column: str) -> datetime:
        value = self.get_nullable_datetime(column)
        return datetime.min if value is None else value

    def get_nullable_datetime(self, column: str) -> Optional[datetime]:
        value = self._raw(column)
        if value is _MISSING or value is None:
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                return None
        return None

    # Decimal types

    def get_decimal(self, column: str) -> Decimal:
        value = self.get_nullable_decimal(column)
        return Decimal(0) if value is None else value

    def get_nullable_decimal(self, column: str) -> Optional[Decimal]:
        value = self._raw(column)
        if value is _MISSING or value is None or isinstance(value, bool):
            return None
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (int, float, str)):
            try:
                return Decimal(str(value))
            except InvalidOperation:
                return None
        return None

    # Unique identifier types

    def get_uuid(self, column: str) -> UUID:
        value = self.get_nullable_uuid(column)
        return EMPTY_UUID if value is None else value

    def get_nullable_uuid(self, column: str) -> Optional[UUID]:
        value = self._raw(column)
        if value is _MISSING or value is None:
            return None
        if isinstance(value, UUID):
            return value
        if isinstance(value, str):
            try:
                return UUID(value)
            except ValueError:
                return None
        return None
