from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from sqlalchemy import inspect


def as_uuid(value: Any) -> uuid.UUID:
    """Coerce ``value`` (UUID or its string form) to :class:`uuid.UUID`."""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def jsonable(value: Any) -> Any:
    """Convert ids and timestamps so ``value`` can be stored in a JSON column."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    return value


def column_values(instance: Any, exclude: Iterable[str] = ()) -> dict[str, Any]:
    """Return the mapped column attributes of ``instance`` as a plain dict."""
    skipped = set(exclude)
    mapper = inspect(instance).mapper
    return {
        attr.key: getattr(instance, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in skipped
    }
