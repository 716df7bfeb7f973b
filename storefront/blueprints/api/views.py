"""Public JSON API: content segments, quote submission, tracking, AI copy."""
import logging
from flask import g, request
from storefront.blueprints.api import api_bp
from storefront.services import ai_service, quote_service, segment_service
from storefront.services.auth_service import admin_required

logger = logging.getLogger(__name__)


@api_bp.route("/data/<key>", methods=["GET"])
def get_segment(key):
    value = segment_service.get_segment(key)
    if value is None:
        return {"message": "Empty Segment"}, 404
    # Flask only jsonifies dict/list returns; both segment shapes qualify
    return value


@api_bp.route("/data/<key>", methods=["POST"])
@admin_required
def replace_segment(key):
    if not segment_service.is_segment_key(key):
        return {"message": "Unknown segment"}, 404
    body = request.get_json(silent=True)
    if body is None or not isinstance(body, (list, dict)):
        return {"message": "A JSON list or object body is required"}, 400
    segment_service.replace_segment(key, body, actor=g.admin)
    return {"success": True}


@api_bp.route("/quotes", methods=["POST"])
def submit_quote():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {"success": False, "message": "JSON body required"}, 400
    quote = quote_service.submit_quote(payload)
    return {"success": True, "id": quote.id, "status": quote.status}


@api_bp.route("/track/<quote_id>")
def track(quote_id):
    view = quote_service.track_quote(quote_id)
    if view is None:
        return {"message": "Not found"}, 404
    return view


@api_bp.route("/gemini", methods=["POST"])
def gemini():
    body = request.get_json(silent=True) or {}
    kind = body.get("type")
    payload = body.get("payload") or {}

    if not ai_service.is_configured():
        return {"message": "GEMINI_API_KEY not configured"}, 500

    try:
        if kind == "description":
            text = ai_service.generate_description(
                payload.get("productName", ""), payload.get("category", "")
            )
            return {"text": text}
        if kind == "advisor":
            products = payload.get("allProducts")
            if products is None:
                products = segment_service.get_segment("products") or []
            return {"text": ai_service.advise(payload.get("messages"), products)}
        if kind == "review":
            return ai_service.generate_review(payload.get("keywords", ""))
    except Exception:
        logger.exception("Gemini request failed")
        return {"message": "Service Unavailable"}, 500

    return {"message": "Unknown type"}, 400
