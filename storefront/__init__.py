import os
from flask import Flask, request
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

load_dotenv()


def create_app(config_name=None):
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            # Default to production on managed platforms to avoid accidental
            # debug mode/weak defaults when env selection is omitted.
            if os.environ.get("RAILWAY_ENVIRONMENT") or os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from storefront.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from storefront.extensions import db, migrate

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    # Import models so Alembic sees them
    from storefront.models import Segment, Quote, AuditLog  # noqa: F401

    # Register blueprints
    from storefront.blueprints.api import api_bp
    from storefront.blueprints.admin import admin_bp

    flask_app.register_blueprint(api_bp, url_prefix="/api")
    flask_app.register_blueprint(admin_bp, url_prefix="/api/admin")

    register_error_handlers(flask_app)

    # Register CLI commands
    from storefront.cli import register_cli

    register_cli(flask_app)

    # Health check
    @flask_app.route("/health")
    def health():
        checks = {"status": "ok"}
        try:
            db.session.execute(db.text("SELECT 1"))
            checks["db"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check DB probe failed")
            checks["db"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app


def register_error_handlers(flask_app):
    from storefront.errors import NotFoundError, ValidationError

    @flask_app.errorhandler(ValidationError)
    def validation_error(e):
        return {"success": False, "message": str(e), "errors": e.errors}, 400

    @flask_app.errorhandler(NotFoundError)
    def not_found(e):
        return {"success": False, "message": f"Not found: {e}"}, 404

    @flask_app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        flask_app.logger.exception("Unhandled error on %s", request.path)
        return {"success": False, "message": "Internal Server Error"}, 500
