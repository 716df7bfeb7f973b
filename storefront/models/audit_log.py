from datetime import datetime, timezone
from storefront.extensions import db


class AuditLog(db.Model):
    __tablename__ = "audit_log"

    id = db.Column(db.Integer, primary_key=True)
    actor = db.Column(db.String(100), nullable=False, index=True)
    action = db.Column(db.String(50), nullable=False)
    target = db.Column(db.String(100), nullable=True, index=True)
    payload = db.Column(db.JSON)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    ACTIONS = {
        "REPLACE_SEGMENT",
        "SEED_SEGMENT",
        "UPDATE_QUOTE_STATUS",
        "SET_CREDENTIALS",
    }

    def __repr__(self):
        return f"<AuditLog {self.action} by {self.actor}>"
