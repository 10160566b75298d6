# Re-export models so callers can use: from hopeclub.models import Student, PointEvent, ...
from .student import Student, Guardian, guardian_student
from .points import PointCategory, PointEvent
from .incident import Incident
from .store import StoreItem, Redemption
from .audit import AuditLog

__all__ = [
    # people
    "Student", "Guardian", "guardian_student",
    # ledger
    "PointCategory", "PointEvent", "StoreItem", "Redemption",
    # feed & audit
    "Incident", "AuditLog",
]
