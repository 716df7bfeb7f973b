from datetime import datetime, timezone
from storefront.extensions import db


class Quote(db.Model):
    __tablename__ = "quotes"

    id = db.Column(db.String(32), primary_key=True)  # ORD-1001 / QT-1001
    kind = db.Column(db.String(10), nullable=False, index=True)  # order, quote
    status = db.Column(db.String(20), nullable=False, default="New", index=True)
    contact = db.Column(db.JSON, nullable=False, default=dict)
    items = db.Column(db.JSON, nullable=False, default=list)
    submission_date = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Typical progression; no transition graph is enforced.
    STATUSES = ("New", "Contacted", "In Progress", "Completed", "Cancelled")
    KINDS = {"order": "ORD", "quote": "QT"}

    @property
    def is_order(self):
        return self.id.startswith("ORD-")

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.kind,
            "status": self.status,
            "contact": self.contact or {},
            "items": self.items or [],
            "submissionDate": _isoformat(self.submission_date),
        }

    def __repr__(self):
        return f"<Quote {self.id} [{self.status}]>"


def _isoformat(value):
    if value is None:
        return None
    # SQLite drops tzinfo on the way back out
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
