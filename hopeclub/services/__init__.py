from .awarding import award_points, ensure_category_active
from .balance import compute_balance
from .catalog import list_catalog
from .incidents import log_incident
from .redemption import redeem_item
from .reporting import ActivityEntry, CalendarDay, points_calendar, recent_activity

__all__ = [
    "award_points",
    "ensure_category_active",
    "compute_balance",
    "list_catalog",
    "log_incident",
    "redeem_item",
    "ActivityEntry",
    "CalendarDay",
    "points_calendar",
    "recent_activity",
]
