"""Identity context and the capability table that gates every operation.

The ledger services never look at roles. Callers resolve an :class:`Identity`
and ask :meth:`CapabilityPolicy.can_perform` first. The table mirrors the
row-level rules of the original database: admins may do everything, staff run
the day-to-day ledger, guardians see their linked students, students see
themselves, and anyone may browse the store catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopeclub.models import guardian_student


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    GUARDIAN = "guardian"
    STUDENT = "student"
    ANONYMOUS = "anonymous"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ANONYMOUS


class Operation(str, Enum):
    AWARD_POINTS = "award_points"
    REDEEM_ITEM = "redeem_item"
    LOG_INCIDENT = "log_incident"
    VIEW_BALANCE = "view_balance"
    VIEW_CALENDAR = "view_calendar"
    VIEW_ACTIVITY = "view_activity"
    VIEW_CATALOG = "view_catalog"
    VIEW_AUDIT = "view_audit"
    MANAGE_STORE = "manage_store"
    MANAGE_CATEGORIES = "manage_categories"


class Scope(str, Enum):
    ANY = "any"
    LINKED = "linked"  # guardian linked to the target student
    SELF = "self"  # actor id is the target student's id


@dataclass(frozen=True)
class Identity:
    actor_id: Optional[uuid.UUID]
    role: Role

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls(actor_id=None, role=Role.ANONYMOUS)


_STAFF = {Role.ADMIN: Scope.ANY, Role.STAFF: Scope.ANY}
_STUDENT_DATA = {**_STAFF, Role.GUARDIAN: Scope.LINKED, Role.STUDENT: Scope.SELF}

CAPABILITIES: Mapping[Operation, Mapping[Role, Scope]] = {
    Operation.AWARD_POINTS: _STAFF,
    Operation.REDEEM_ITEM: _STAFF,
    Operation.LOG_INCIDENT: _STAFF,
    Operation.VIEW_BALANCE: _STUDENT_DATA,
    Operation.VIEW_CALENDAR: _STUDENT_DATA,
    Operation.VIEW_ACTIVITY: _STAFF,
    Operation.VIEW_CATALOG: {role: Scope.ANY for role in Role},
    Operation.VIEW_AUDIT: {Role.ADMIN: Scope.ANY},
    Operation.MANAGE_STORE: _STAFF,
    Operation.MANAGE_CATEGORIES: {Role.ADMIN: Scope.ANY},
}

LinkLookup = Callable[[uuid.UUID], Iterable[uuid.UUID]]


def guardian_links(session: Session) -> LinkLookup:
    """Build a lookup returning the student ids linked to a guardian."""

    def lookup(guardian_id: uuid.UUID) -> Iterable[uuid.UUID]:
        return session.execute(
            select(guardian_student.c.student_id).where(guardian_student.c.guardian_id == guardian_id)
        ).scalars()

    return lookup


class CapabilityPolicy:
    def __init__(
        self,
        capabilities: Mapping[Operation, Mapping[Role, Scope]] = CAPABILITIES,
        *,
        linked_students: Optional[LinkLookup] = None,
    ) -> None:
        self._capabilities = capabilities
        self._linked_students = linked_students

    def can_perform(
        self,
        identity: Identity,
        operation: Operation,
        student_id: Optional[uuid.UUID] = None,
    ) -> bool:
        scope = self._capabilities.get(operation, {}).get(identity.role)
        if scope is None:
            return False
        if scope is Scope.ANY:
            return True
        if student_id is None or identity.actor_id is None:
            return False
        if scope is Scope.SELF:
            return identity.actor_id == student_id
        if self._linked_students is None:
            return False
        return student_id in set(self._linked_students(identity.actor_id))
