"""Normalization and validation of untrusted filter input.

Everything here runs before a query descriptor is built. Helpers either
return a clean value or raise :class:`ValidationException`; nothing that
leaves this module can alter query semantics.

Two policies coexist on purpose:

* search terms are *rejected* when malformed (non-string, empty with no
  other filter, too long);
* tag id lists drop malformed entries *silently* and are only rejected on
  length.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Any, Literal
from uuid import UUID

from forum_service.core.exceptions import ValidationException
from forum_service.core.pagination.cursor import MAX_INTEGER_ID, MIN_INTEGER_ID

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_LIKE_META = re.compile(r"([\\%_])")

LIKE_ESCAPE = "\\"
MAX_TAG_IDS = 10

_MAX_ID_DIGITS = len(str(MAX_INTEGER_ID)) + 1


@dataclass(frozen=True, slots=True)
class SanitizedTerm:
    """A search term ready for literal, case-insensitive substring matching.

    Attributes:
        text: Trimmed term as the user typed it, echoed back in ``meta``.
        pattern: ``text`` with LIKE wildcards escaped using :data:`LIKE_ESCAPE`.
    """

    text: str
    pattern: str

    def __str__(self) -> str:
        return self.text


def escape_like(value: str) -> str:
    """Escape ``\\``, ``%`` and ``_`` so they match literally."""
    return _LIKE_META.sub(r"\\\1", value)


def sanitize_search_term(
    raw: Any,
    *,
    has_alternative_filter: bool = False,
    max_length: int | None = None,
    field: str = "search",
) -> SanitizedTerm | None:
    """Trim, validate and escape a free-text search term.

    Args:
        raw: Value from the query string. ``None`` means absent.
        has_alternative_filter: Whether another filter dimension (e.g. a tag
            list) already makes the query non-trivial.
        max_length: Upper bound on the trimmed length.
        field: Parameter name reported in errors.

    Returns:
        The sanitized term, or ``None`` when absent and an alternative
        filter is present.

    Raises:
        ValidationException: If the term is not a string, is empty with no
            alternative filter, or is too long.
    """
    if raw is not None and not isinstance(raw, str):
        raise ValidationException(detail=f"{field} must be a string", field=field)

    text = (raw or "").strip()
    if not text:
        if has_alternative_filter:
            return None
        raise ValidationException(
            detail="A search term or at least one filter is required",
            field=field,
        )

    if max_length is not None and len(text) > max_length:
        raise ValidationException(
            detail=f"{field} must be at most {max_length} characters",
            field=field,
        )

    return SanitizedTerm(text=text, pattern=escape_like(text))


def sanitize_tag_ids(
    raw: str | Iterable[Any] | None,
    *,
    max_items: int = MAX_TAG_IDS,
    field: str = "tagIds",
) -> list[int]:
    """Parse a comma-separated tag id list.

    Tokens that are blank, are not integers, are ``<= 0``, exceed the id
    range or repeat an earlier id are dropped without error. The cap is
    checked against every supplied token, blank ones included, before
    anything is dropped. A wholly blank string means no filter.

    Example:
        >>> sanitize_tag_ids("1,-2,0,3,3")
        [1, 3]

    Raises:
        ValidationException: If more than ``max_items`` tokens are supplied.
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        if not raw.strip():
            return []
        tokens = [token.strip() for token in raw.split(",")]
    else:
        tokens = [str(token).strip() for token in raw]

    if len(tokens) > max_items:
        raise ValidationException(
            detail=f"At most {max_items} tag ids may be supplied",
            field=field,
            extra={"supplied": len(tokens)},
        )

    kept: list[int] = []
    seen: set[int] = set()
    for token in tokens:
        if not _INTEGER_RE.match(token) or len(token) > _MAX_ID_DIGITS:
            continue
        value = int(token)
        if not 0 < value <= MAX_INTEGER_ID or value in seen:
            continue
        seen.add(value)
        kept.append(value)

    if len(kept) > max_items:
        raise ValidationException(
            detail=f"At most {max_items} tag ids may be supplied",
            field=field,
        )
    return kept


def sanitize_exclusive_pair[A, B](
    a: A | None,
    b: B | None,
    *,
    names: tuple[str, str] = ("postId", "commentId"),
    allow_neither: bool = False,
) -> tuple[A | None, B | None]:
    """Ensure exactly one of two mutually exclusive identifiers is present.

    Args:
        a: First identifier (``None`` when absent).
        b: Second identifier (``None`` when absent).
        names: Parameter names used in error messages.
        allow_neither: Accept the case where both are absent ("at most one").

    Returns:
        ``(a, b)`` unchanged, with exactly one (or, if allowed, neither) set.

    Raises:
        ValidationException: If both are present, or neither and not allowed.
    """
    if a is not None and b is not None:
        raise ValidationException(
            detail=f"Provide either {names[0]} or {names[1]}, not both",
            field=names[0],
        )
    if a is None and b is None and not allow_neither:
        raise ValidationException(
            detail=f"Either {names[0]} or {names[1]} is required",
            field=names[0],
        )
    return a, b


# ──────────────────────────────────────────────────────────────
# Scalar parameters
# ──────────────────────────────────────────────────────────────


def _out_of_range(field: str) -> ValidationException:
    return ValidationException(
        detail=f"{field} must be between {MIN_INTEGER_ID} and {MAX_INTEGER_ID}",
        field=field,
    )


def _in_range(value: int, field: str) -> int:
    if not MIN_INTEGER_ID <= value <= MAX_INTEGER_ID:
        raise _out_of_range(field)
    return value


def parse_int(raw: Any, *, field: str) -> int | None:
    """Parse an optional integer query parameter; blank means absent.

    Values outside the signed 64-bit range are rejected.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationException(detail=f"{field} must be an integer", field=field)
    if isinstance(raw, int):
        return _in_range(raw, field)
    text = str(raw).strip()
    if not text:
        return None
    if not _INTEGER_RE.match(text):
        raise ValidationException(detail=f"{field} must be an integer", field=field)
    if len(text) > _MAX_ID_DIGITS:
        raise _out_of_range(field)
    return _in_range(int(text), field)


def sanitize_positive_int(raw: Any, *, field: str) -> int | None:
    """Parse an optional positive integer id."""
    value = parse_int(raw, field=field)
    if value is not None and value <= 0:
        raise ValidationException(detail=f"{field} must be a positive integer", field=field)
    return value


def sanitize_uuid(raw: Any, *, field: str) -> UUID | None:
    """Parse an optional UUID id."""
    if raw is None or isinstance(raw, UUID):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return UUID(text)
    except ValueError as e:
        raise ValidationException(detail=f"{field} must be a valid UUID", field=field) from e


def sanitize_choice(raw: Any, choices: Iterable[str], *, field: str) -> str | None:
    """Accept an optional value only if it is one of ``choices``."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    allowed = list(choices)
    if text not in allowed:
        raise ValidationException(
            detail=f"{field} must be one of: {', '.join(allowed)}",
            field=field,
        )
    return text


def sanitize_date(
    raw: Any,
    *,
    field: str,
    bound: Literal["start", "end"] = "start",
) -> datetime | None:
    """Parse a ``YYYY-MM-DD`` date and widen it to the start or end of that day (UTC)."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        day = date.fromisoformat(text)
    except ValueError as e:
        raise ValidationException(
            detail=f"{field} must be a date in YYYY-MM-DD format",
            field=field,
        ) from e
    moment = time.min if bound == "start" else time.max
    return datetime.combine(day, moment, tzinfo=UTC)


__all__ = [
    "LIKE_ESCAPE",
    "MAX_TAG_IDS",
    "SanitizedTerm",
    "escape_like",
    "parse_int",
    "sanitize_choice",
    "sanitize_date",
    "sanitize_exclusive_pair",
    "sanitize_positive_int",
    "sanitize_search_term",
    "sanitize_tag_ids",
    "sanitize_uuid",
]
