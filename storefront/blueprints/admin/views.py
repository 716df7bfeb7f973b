"""Admin endpoints: login, credentials, inquiry inbox, dashboard stats."""
import logging
from datetime import datetime, timezone
from flask import g, request
from storefront.blueprints.admin import admin_bp
from storefront.services import ai_service, auth_service, quote_service, segment_service
from storefront.services.auth_service import admin_required

logger = logging.getLogger(__name__)


@admin_bp.route("/login", methods=["POST"])
def login():
    body = request.get_json(silent=True) or {}
    token = auth_service.authenticate(body.get("username"), body.get("password"))
    if not token:
        logger.info("Failed admin login for %r", body.get("username"))
        return {"success": False, "message": "Invalid credentials"}, 401
    return {"success": True, "token": token}


@admin_bp.route("/credentials", methods=["POST"])
@admin_required
def credentials():
    body = request.get_json(silent=True) or {}
    auth_service.set_credentials(body.get("username"), body.get("password"), actor=g.admin)
    return {"success": True}


@admin_bp.route("/health")
@admin_required
def health():
    segments = segment_service.segment_status()
    return {
        "store": all(segments.values()),
        "segments": segments,
        "ai": ai_service.is_configured(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@admin_bp.route("/quotes")
@admin_required
def list_quotes():
    kind = request.args.get("kind", "all")
    order = request.args.get("order", "newest")
    quotes = quote_service.list_quotes(kind=kind, order=order)
    return {"quotes": [q.to_dict() for q in quotes]}


@admin_bp.route("/quotes/<quote_id>/status", methods=["POST"])
@admin_required
def update_quote_status(quote_id):
    body = request.get_json(silent=True) or {}
    quote = quote_service.update_status(quote_id, body.get("status"), actor=g.admin)
    return {"success": True, "id": quote.id, "status": quote.status}


@admin_bp.route("/stats")
@admin_required
def stats():
    data = quote_service.get_stats()
    data["products"] = len(segment_service.get_segment("products") or [])
    return data
