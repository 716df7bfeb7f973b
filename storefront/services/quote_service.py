import logging
from datetime import datetime, timezone
from storefront.errors import NotFoundError, ValidationError
from storefront.extensions import db
from storefront.models.audit_log import AuditLog
from storefront.models.quote import Quote
from storefront.services.quote_draft import validate_selection

logger = logging.getLogger(__name__)


def generate_quote_id(kind):
    """Next ``ORD-``/``QT-`` identifier for the given submission kind."""
    prefix = Quote.KINDS[kind]
    count = db.session.execute(
        db.select(db.func.count(Quote.id)).where(Quote.kind == kind)
    ).scalar()
    return f"{prefix}-{count + 1001}"


def validate_submission(payload):
    errors = {}
    kind = payload.get("type", "quote")
    if not isinstance(kind, str) or kind not in Quote.KINDS:
        errors["type"] = "Type must be 'order' or 'quote'"

    contact = payload.get("contact") or {}
    if not isinstance(contact, dict):
        errors["contact"] = "Contact details must be an object"
        contact = {}
    if not str(contact.get("name") or "").strip():
        errors["contact.name"] = "Name is required"
    if "@" not in str(contact.get("email") or ""):
        errors["contact.email"] = "A valid email is required"

    items = payload.get("items") or []
    if not isinstance(items, list):
        errors["items"] = "Items must be a list"
        items = []
    elif not items:
        errors["items"] = "At least one item is required"
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            errors[f"items.{i}"] = "Item must be an object"
            continue
        product = item.get("product")
        if not isinstance(product, dict) or not product.get("name"):
            errors[f"items.{i}.product"] = "Product name is required"
        try:
            validate_selection(item.get("color"), item.get("sizeQuantities") or {})
        except ValidationError as e:
            for field, message in e.errors.items():
                errors[f"items.{i}.{field}"] = message

    if errors:
        raise ValidationError(errors)
    return kind


def submit_quote(payload):
    """Store a submitted order/quote and return it with status ``New``."""
    kind = validate_submission(payload)
    quote = Quote(
        id=generate_quote_id(kind),
        kind=kind,
        status="New",
        contact=payload["contact"],
        items=payload["items"],
    )
    db.session.add(quote)
    db.session.commit()
    logger.info("Received %s %s with %d items", kind, quote.id, len(quote.items))
    return quote


def get_quote(quote_id):
    return db.session.get(Quote, (quote_id or "").strip().upper())


def track_quote(quote_id):
    """Public tracking view: status, contact name and product names only."""
    quote = get_quote(quote_id)
    if not quote:
        return None
    data = quote.to_dict()
    return {
        "id": data["id"],
        "submissionDate": data["submissionDate"],
        "status": data["status"],
        "contact": {"name": (quote.contact or {}).get("name")},
        "items": [
            {"product": {"name": (item.get("product") or {}).get("name")}}
            for item in quote.items or []
        ],
    }


def update_status(quote_id, status, actor):
    if status not in Quote.STATUSES:
        raise ValidationError({"status": f"Status must be one of {', '.join(Quote.STATUSES)}"})
    quote = get_quote(quote_id)
    if not quote:
        raise NotFoundError(quote_id)

    old_status = quote.status
    quote.status = status
    quote.updated_at = datetime.now(timezone.utc)
    db.session.add(
        AuditLog(
            actor=actor,
            action="UPDATE_QUOTE_STATUS",
            target=quote.id,
            payload={"old": old_status, "new": status},
        )
    )
    db.session.commit()
    return quote


def list_quotes(kind="all", order="newest"):
    """Quotes for the admin inbox, filtered by kind and sorted by date."""
    query = Quote.query
    if kind == "orders":
        query = query.filter(Quote.id.like("ORD-%"))
    elif kind == "quotes":
        query = query.filter(Quote.id.like("QT-%"))

    if order == "oldest":
        query = query.order_by(Quote.submission_date.asc())
    else:
        query = query.order_by(Quote.submission_date.desc())
    return query.all()


def get_stats():
    """Counts for the dashboard analytics cards."""
    total = Quote.query.count()
    orders = Quote.query.filter(Quote.id.like("ORD-%")).count()
    return {
        "total": total,
        "orders": orders,
        "quotes": total - orders,
        "new": Quote.query.filter_by(status="New").count(),
    }
