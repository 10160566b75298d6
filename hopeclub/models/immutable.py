from __future__ import annotations

from sqlalchemy import event

from hopeclub.exceptions import ImmutableRecordError


def _reject(mapper, connection, target) -> None:
    raise ImmutableRecordError(type(target).__name__)


def append_only(model: type) -> type:
    """Class decorator: rows of ``model`` can be inserted but never updated or deleted."""
    event.listen(model, "before_update", _reject)
    event.listen(model, "before_delete", _reject)
    return model
