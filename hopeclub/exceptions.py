"""Error vocabulary shared by the ledger services and the RPC boundary.

Every error carries a stable ``code`` (what callers switch on), a
``status_code`` the boundary maps it to, and a ``details()`` payload for
diagnostics.
"""

from __future__ import annotations

from typing import Any


class HopeClubError(Exception):
    """Base class for all expected, caller-handled failures."""

    code = "HOPECLUB_ERROR"
    status_code = 400

    def details(self) -> dict[str, Any]:
        return {}


class StudentNotFound(HopeClubError):
    code = "STUDENT_NOT_FOUND"
    status_code = 404

    def __init__(self, student_id: Any) -> None:
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found")

    def details(self) -> dict[str, Any]:
        return {"student_id": str(self.student_id)}


class CategoryNotFound(HopeClubError):
    code = "CATEGORY_NOT_FOUND"
    status_code = 404

    def __init__(self, category_id: Any) -> None:
        self.category_id = category_id
        super().__init__(f"Point category {category_id} not found")

    def details(self) -> dict[str, Any]:
        return {"category_id": str(self.category_id)}


class CategoryInactive(HopeClubError):
    code = "CATEGORY_INACTIVE"
    status_code = 409

    def __init__(self, category_id: Any) -> None:
        self.category_id = category_id
        super().__init__(f"Point category {category_id} is not active")

    def details(self) -> dict[str, Any]:
        return {"category_id": str(self.category_id)}


class AmountOutOfRange(HopeClubError):
    code = "AMOUNT_OUT_OF_RANGE"
    status_code = 422

    def __init__(self, amount: int, min_value: int, max_value: int) -> None:
        self.amount = amount
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(f"amount={amount} min={min_value} max={max_value}")

    def details(self) -> dict[str, Any]:
        return {"amount": self.amount, "min_value": self.min_value, "max_value": self.max_value}


class ItemNotFound(HopeClubError):
    code = "ITEM_NOT_FOUND"
    status_code = 404

    def __init__(self, item_id: Any) -> None:
        self.item_id = item_id
        super().__init__(f"Store item {item_id} not found")

    def details(self) -> dict[str, Any]:
        return {"item_id": str(self.item_id)}


class OutOfStock(HopeClubError):
    code = "OUT_OF_STOCK"
    status_code = 409

    def __init__(self, item_id: Any) -> None:
        self.item_id = item_id
        super().__init__(f"Store item {item_id} is out of stock")

    def details(self) -> dict[str, Any]:
        return {"item_id": str(self.item_id)}


class InsufficientPoints(HopeClubError):
    code = "INSUFFICIENT_POINTS"
    status_code = 409

    def __init__(self, balance: int, cost: int) -> None:
        self.balance = balance
        self.cost = cost
        super().__init__(f"balance={balance} cost={cost}")

    def details(self) -> dict[str, Any]:
        return {"balance": self.balance, "cost": self.cost}


class ImmutableRecordError(HopeClubError):
    """Raised when a flush would update or delete an append-only row."""

    code = "IMMUTABLE_RECORD"
    status_code = 409

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} rows are append-only")

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity}


class PermissionDenied(HopeClubError):
    code = "PERMISSION_DENIED"
    status_code = 403

    def __init__(self, operation: str, role: str) -> None:
        self.operation = operation
        self.role = role
        super().__init__(f"Role '{role}' may not perform '{operation}'")

    def details(self) -> dict[str, Any]:
        return {"operation": self.operation, "role": self.role}


__all__ = [
    "HopeClubError",
    "StudentNotFound",
    "CategoryNotFound",
    "CategoryInactive",
    "AmountOutOfRange",
    "ItemNotFound",
    "OutOfStock",
    "InsufficientPoints",
    "ImmutableRecordError",
    "PermissionDenied",
]
