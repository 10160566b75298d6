from typing import Any

from fastapi import Depends, Request

from hopeclub.config import settings
from hopeclub.exceptions import PermissionDenied
from hopeclub.extensions import db
from hopeclub.policy import CapabilityPolicy, Identity, Operation, guardian_links
from hopeclub.security import decode_identity
from hopeclub.services.orm_utils import as_uuid


def get_db() -> Any:
    """Dependency to provide a database session."""
    try:
        yield db.session
    finally:
        db.remove_session()


def get_identity(request: Request) -> Identity:
    """Reads the bearer token (header first, then cookie) into an identity."""
    token = None
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
    if not token:
        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    return decode_identity(token)


def get_policy(session=Depends(get_db)) -> CapabilityPolicy:
    return CapabilityPolicy(linked_students=guardian_links(session))


def require_capability(operation: Operation):
    """Dependency factory that gates a route on the capability table.

    Student-scoped rules (guardian/self) are checked against the
    ``student_id`` path parameter when the route has one.
    """
    def capability_checker(
        request: Request,
        identity: Identity = Depends(get_identity),
        policy: CapabilityPolicy = Depends(get_policy),
    ) -> Identity:
        student_id = None
        raw = request.path_params.get("student_id")
        if raw:
            try:
                student_id = as_uuid(raw)
            except ValueError:
                student_id = None
        if not policy.can_perform(identity, operation, student_id):
            raise PermissionDenied(operation.value, identity.role.value)
        return identity
    return capability_checker
