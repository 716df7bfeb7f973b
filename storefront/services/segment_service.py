import logging
from storefront.defaults import default_segments
from storefront.extensions import db
from storefront.models.audit_log import AuditLog
from storefront.models.segment import SEGMENT_KEYS, Segment

logger = logging.getLogger(__name__)


def is_segment_key(key):
    return key in SEGMENT_KEYS


def get_segment(key):
    """Stored value for a public segment, or None when unset/unknown."""
    if not is_segment_key(key):
        return None
    return Segment.get(key)


def replace_segment(key, value, actor):
    """Overwrite a whole segment. Last write wins; there is no merge."""
    if not is_segment_key(key):
        raise KeyError(key)
    Segment.put(key, value)
    db.session.add(
        AuditLog(
            actor=actor,
            action="REPLACE_SEGMENT",
            target=key,
            payload={"size": len(value) if isinstance(value, (list, dict)) else None},
        )
    )
    db.session.commit()
    logger.info("Segment %s replaced by %s", key, actor)


def seed_segments(actor="system", force=False):
    """Write the built-in defaults; existing segments are kept unless forced."""
    seeded = []
    for key, value in default_segments().items():
        if not force and Segment.exists(key):
            continue
        Segment.put(key, value)
        seeded.append(key)
    if seeded:
        db.session.add(
            AuditLog(actor=actor, action="SEED_SEGMENT", payload={"keys": seeded})
        )
        db.session.commit()
    return seeded


def segment_status():
    """Which segments hold stored data, for the admin health view."""
    stored = {row.key for row in Segment.query.filter(Segment.key.in_(SEGMENT_KEYS))}
    return {key: key in stored for key in SEGMENT_KEYS}
