"""Cursor encoding and decoding for pagination.

Cursors are opaque tokens that encode the position of the last row of a
page, i.e. the value(s) of the collection's sort key for that row. The next
request hands the token back and the repository seeks directly past it.

Two token shapes are produced, chosen from the sort key:

1. Single-field unique keys (a row id) use the value itself. Integer ids
   travel as JSON numbers, UUID ids as their canonical string.
2. Compound keys (``created_at desc, id desc``) use a JSON object with the
   sort field values, base64 URL-safe encoded for use in query strings.

Example compound payload:
    {"v":{"created_at":"2025-01-15T10:30:00+00:00","id":"8d1c...e2"}}
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from forum_service.core.exceptions import ValidationException

CursorToken = str | int

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Signed 64-bit range of an SQL BIGINT id column
MIN_INTEGER_ID = -(2**63)
MAX_INTEGER_ID = 2**63 - 1


class KeyType(StrEnum):
    """Value type of a sort field, used to revive decoded cursor values."""

    INTEGER = "int"
    UUID = "uuid"
    DATETIME = "datetime"
    STRING = "str"


# ──────────────────────────────────────────────────────────────
# Sort keys
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SortField:
    """One ordering criterion of a collection."""

    name: str
    key_type: KeyType = KeyType.INTEGER
    descending: bool = False

    def __str__(self) -> str:
        return f"{self.name} {'desc' if self.descending else 'asc'}"


@dataclass(frozen=True, slots=True)
class SortKey:
    """The field(s) a collection is ordered by.

    Cursor pagination needs the key to be unique per row. Use
    :meth:`with_tie_breaker` to append the primary key behind a
    non-unique field such as ``created_at``.

    Example:
        key = SortKey.of(SortField("created_at", KeyType.DATETIME, descending=True))
        key = key.with_tie_breaker(SortField("id", KeyType.UUID, descending=True))
    """

    fields: tuple[SortField, ...]

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("SortKey requires at least one field")

    @classmethod
    def of(cls, *fields: SortField) -> SortKey:
        return cls(tuple(fields))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def with_tie_breaker(self, field: SortField) -> SortKey:
        """Return a key that ends with ``field``, appending it if missing."""
        if self.fields[-1].name == field.name:
            return self
        if field.name in self.names:
            raise ValueError(f"Tie-breaker {field.name!r} must be the last sort field")
        return SortKey((*self.fields, field))

    def codec(self) -> CursorCodec:
        """Pick the cursor codec matching this key's shape."""
        if len(self.fields) == 1:
            only = self.fields[0]
            if only.key_type is KeyType.INTEGER:
                return IntegerCursorCodec(self)
            if only.key_type is KeyType.UUID:
                return UUIDCursorCodec(self)
        return CompositeCursorCodec(self)

    def __str__(self) -> str:
        return ", ".join(str(f) for f in self.fields)


# ──────────────────────────────────────────────────────────────
# Codecs
# ──────────────────────────────────────────────────────────────


def _read(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row[name]
    return getattr(row, name)


def _invalid(token: Any, reason: str) -> ValidationException:
    return ValidationException(
        detail=f"Invalid cursor: {reason}",
        field="cursor",
        extra={"cursor": str(token)[:100]},
    )


class CursorCodec(ABC):
    """Encode and decode pagination cursors for one sort key.

    ``extract`` pulls the sort-key value(s) out of a row, ``encode`` turns
    them into a token and ``decode`` turns a token back into the value(s).
    ``position`` exposes decoded values as a ``{field: value}`` mapping,
    which is what the repository seeks on.
    """

    def __init__(self, sort_key: SortKey) -> None:
        self.sort_key = sort_key

    @abstractmethod
    def extract(self, row: Any) -> Any: ...

    @abstractmethod
    def encode(self, value: Any) -> CursorToken: ...

    @abstractmethod
    def decode(self, token: CursorToken) -> Any: ...

    @abstractmethod
    def position(self, value: Any) -> dict[str, Any]: ...

    def encode_row(self, row: Any) -> CursorToken:
        """Create a cursor from the last row of a page.

        Args:
            row: SQLAlchemy model instance or mapping.

        Returns:
            Token resuming iteration right after ``row``.
        """
        return self.encode(self.extract(row))


class _ScalarCursorCodec(CursorCodec):
    @property
    def field(self) -> SortField:
        return self.sort_key.fields[0]

    def extract(self, row: Any) -> Any:
        return _read(row, self.field.name)

    def position(self, value: Any) -> dict[str, Any]:
        return {self.field.name: value}


class IntegerCursorCodec(_ScalarCursorCodec):
    """Integer-keyed collections: the token is the id itself."""

    def encode(self, value: Any) -> CursorToken:
        return int(value)

    def decode(self, token: CursorToken) -> int:
        if isinstance(token, bool):
            raise _invalid(token, "expected an integer")
        if isinstance(token, str) and _INTEGER_RE.match(token.strip()):
            try:
                value = int(token.strip())
            except ValueError as e:
                # Longer than the interpreter's int digit limit
                raise _invalid(token, "integer out of range") from e
        elif isinstance(token, int):
            value = token
        else:
            raise _invalid(token, "expected an integer")
        if not MIN_INTEGER_ID <= value <= MAX_INTEGER_ID:
            raise _invalid(token, "integer out of range")
        return value


class UUIDCursorCodec(_ScalarCursorCodec):
    """UUID-keyed collections: the token is the canonical UUID string."""

    def encode(self, value: Any) -> CursorToken:
        return str(value)

    def decode(self, token: CursorToken) -> UUID:
        if isinstance(token, UUID):
            return token
        if not isinstance(token, str):
            raise _invalid(token, "expected a UUID")
        try:
            return UUID(token.strip())
        except ValueError as e:
            raise _invalid(token, "expected a UUID") from e


class CompositeCursorCodec(CursorCodec):
    """Compound keys: base64 URL-safe JSON of the sort field values.

    Usage:
        codec = CompositeCursorCodec(key)
        token = codec.encode_row(post)
        codec.decode(token)  # {"created_at": datetime(...), "id": UUID(...)}
    """

    def extract(self, row: Any) -> dict[str, Any]:
        return {name: _read(row, name) for name in self.sort_key.names}

    def position(self, value: Any) -> dict[str, Any]:
        return dict(value)

    def encode(self, value: Any) -> CursorToken:
        payload = {"v": self._serialize_values(value)}
        json_str = json.dumps(payload, separators=(",", ":"))
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    def decode(self, token: CursorToken) -> dict[str, Any]:
        if not isinstance(token, str):
            raise _invalid(token, "expected an opaque string")
        try:
            json_str = base64.urlsafe_b64decode(token.encode()).decode()
            payload = json.loads(json_str)
        except (binascii.Error, UnicodeError, ValueError, RecursionError) as e:
            raise _invalid(token, "corrupted token") from e

        values = payload.get("v") if isinstance(payload, dict) else None
        if not isinstance(values, dict) or set(values) != set(self.sort_key.names):
            raise _invalid(token, "sort fields do not match")

        return {
            field.name: self._revive(field, values[field.name], token)
            for field in self.sort_key.fields
        }

    @staticmethod
    def _serialize_values(values: Mapping[str, Any]) -> dict[str, Any]:
        """Serialize values to JSON-compatible format.

        Handles special types like datetime and UUID.
        """
        result = {}
        for key, value in values.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, UUID):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @staticmethod
    def _revive(field: SortField, raw: Any, token: str) -> Any:
        try:
            match field.key_type:
                case KeyType.INTEGER:
                    if isinstance(raw, bool) or not isinstance(raw, int):
                        raise TypeError(raw)
                    if not MIN_INTEGER_ID <= raw <= MAX_INTEGER_ID:
                        raise ValueError(raw)
                    return raw
                case KeyType.UUID:
                    return UUID(raw)
                case KeyType.DATETIME:
                    return datetime.fromisoformat(raw)
                case KeyType.STRING:
                    if not isinstance(raw, str):
                        raise TypeError(raw)
                    return raw
        except (TypeError, ValueError, AttributeError) as e:
            raise _invalid(token, f"bad value for {field.name}") from e
        raise _invalid(token, f"unsupported key type for {field.name}")


__all__ = [
    "CompositeCursorCodec",
    "CursorCodec",
    "CursorToken",
    "IntegerCursorCodec",
    "KeyType",
    "MAX_INTEGER_ID",
    "MIN_INTEGER_ID",
    "SortField",
    "SortKey",
    "UUIDCursorCodec",
]
