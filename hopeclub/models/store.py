import uuid
from datetime import datetime, timezone

from hopeclub.extensions import db
from hopeclub.models.immutable import append_only


class StoreItem(db.Model):
    __tablename__ = "store_items"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(200), nullable=False)
    cost = db.Column(db.Integer, nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_by = db.Column(db.Uuid, nullable=True)

    __table_args__ = (
        db.CheckConstraint("cost > 0", name="ck_store_item_cost_positive"),
        db.CheckConstraint("stock >= 0", name="ck_store_item_stock_nonnegative"),
    )


@append_only
class Redemption(db.Model):
    __tablename__ = "redemptions"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    student_id = db.Column(db.Uuid, db.ForeignKey("students.id"), nullable=False)
    item_id = db.Column(db.Uuid, db.ForeignKey("store_items.id"), nullable=False)
    cost_at_tx = db.Column(db.Integer, nullable=False)  # price snapshot, not a live reference
    redeemed_at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    created_by = db.Column(db.Uuid, nullable=True)

    student = db.relationship("Student")
    item = db.relationship("StoreItem")

    __table_args__ = (
        db.CheckConstraint("cost_at_tx > 0", name="ck_redemption_cost_positive"),
        db.Index("idx_redemptions_student_redeemed_at", "student_id", "redeemed_at"),
    )
