"""Admin credentials and bearer tokens.

Tokens are ``<username>.<issued_at>.<signature>`` where the signature is an
HMAC-SHA256 of the first two parts keyed with ``SECRET_KEY``.
"""
import base64
import hashlib
import hmac
import logging
import time
from functools import wraps

from flask import current_app, g, request
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.errors import ValidationError
from storefront.extensions import db
from storefront.models.audit_log import AuditLog
from storefront.models.segment import CREDENTIAL_KEY, Segment

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _sign(message):
    key = current_app.config["SECRET_KEY"].encode()
    digest = hmac.new(key, message.encode(), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


def issue_token(username, now=None):
    issued_at = int(now if now is not None else time.time())
    user = base64.urlsafe_b64encode(username.encode()).rstrip(b"=").decode()
    message = f"{user}.{issued_at}"
    return f"{message}.{_sign(message)}"


def verify_token(token, now=None):
    """Return the username a valid token was issued to, else None."""
    if not token:
        return None
    parts = token.split(".")
    if len(parts) != 3:
        return None
    user, issued_at, signature = parts
    if not hmac.compare_digest(signature.encode(), _sign(f"{user}.{issued_at}").encode()):
        return None
    try:
        issued_at = int(issued_at)
        username = base64.urlsafe_b64decode(user + "=" * (-len(user) % 4)).decode()
    except (ValueError, UnicodeDecodeError):
        return None
    now = now if now is not None else time.time()
    if now - issued_at > current_app.config["ADMIN_TOKEN_TTL"]:
        return None
    return username


def get_credentials():
    stored = Segment.get(CREDENTIAL_KEY)
    if stored:
        return stored
    # Not seeded yet: fall back to configured defaults
    return {
        "username": current_app.config["ADMIN_USERNAME"],
        "password_hash": generate_password_hash(current_app.config["ADMIN_PASSWORD"]),
    }


def seed_credentials():
    """Store the configured admin credentials unless some already exist."""
    if Segment.exists(CREDENTIAL_KEY):
        return False
    Segment.put(CREDENTIAL_KEY, get_credentials())
    return True


def authenticate(username, password):
    """Return a fresh token for valid credentials, else None."""
    creds = get_credentials()
    if not username or not password:
        return None
    if not hmac.compare_digest(username.encode(), creds["username"].encode()):
        return None
    if not check_password_hash(creds["password_hash"], password):
        return None
    return issue_token(username)


def set_credentials(username, password, actor):
    if not username or not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            {"password": f"Username and a password of at least {MIN_PASSWORD_LENGTH} characters are required"}
        )
    Segment.put(
        CREDENTIAL_KEY,
        {"username": username, "password_hash": generate_password_hash(password)},
    )
    db.session.add(
        AuditLog(actor=actor, action="SET_CREDENTIALS", payload={"username": username})
    )
    db.session.commit()


def bearer_token():
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip()
    return None


def admin_required(view):
    """Reject requests without a valid bearer token; sets ``g.admin``."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        username = verify_token(bearer_token())
        if not username:
            logger.info("Rejected unauthenticated request to %s", request.path)
            return {"message": "Unauthorized"}, 401
        g.admin = username
        return view(*args, **kwargs)

    return wrapped
