from datetime import datetime, timezone
from storefront.extensions import db

# Segments served by the content API, in load order.
SEGMENT_KEYS = (
    "products",
    "collections",
    "faqs",
    "heroContents",
    "partners",
    "howWeWorkSections",
    "materials",
    "infoCards",
    "featuredVideoContent",
    "brandReviews",
    "platformRatings",
    "communityPosts",
    "pageBanners",
    "services",
    "capabilities",
    "subscriptionModalContent",
    "homeFeature",
)

# Segments holding a single object rather than a list.
OBJECT_SEGMENTS = {"featuredVideoContent", "subscriptionModalContent", "homeFeature"}

# Reserved row for hashed admin credentials; never served over the data API.
CREDENTIAL_KEY = "credential"


class Segment(db.Model):
    """One named top-level JSON document (a whole list or object)."""

    __tablename__ = "segments"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.JSON, nullable=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @staticmethod
    def get(key, default=None):
        row = db.session.get(Segment, key)
        return row.value if row else default

    @staticmethod
    def put(key, value):
        """Replace the whole value stored under ``key``."""
        row = db.session.get(Segment, key)
        if row:
            row.value = value
            row.updated_at = datetime.now(timezone.utc)
        else:
            row = Segment(key=key, value=value)
            db.session.add(row)
        db.session.commit()
        return row

    @staticmethod
    def exists(key):
        return db.session.get(Segment, key) is not None

    def __repr__(self):
        return f"<Segment {self.key}>"
