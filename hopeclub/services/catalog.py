from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopeclub.models import StoreItem


def list_catalog(session: Session, *, include_inactive: bool = False) -> list[StoreItem]:
    query = select(StoreItem).order_by(StoreItem.title)
    if not include_inactive:
        query = query.where(StoreItem.is_active.is_(True))
    return list(session.execute(query).scalars())
