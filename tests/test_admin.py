"""Tests for admin auth and dashboard endpoints."""
import storefront.extensions as ext
from storefront.services import auth_service, quote_service


def login(client, username="admin", password="testing-password"):
    return client.post("/api/admin/login", json={"username": username, "password": password})


def test_login_with_configured_credentials(client, db):
    resp = login(client)
    assert resp.status_code == 200
    token = resp.get_json()["token"]
    assert auth_service.verify_token(token) == "admin"


def test_login_rejects_bad_password(client, db):
    resp = login(client, password="wrong")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_token_expires(app):
    token = auth_service.issue_token("admin", now=1000)
    assert auth_service.verify_token(token, now=1000 + app.config["ADMIN_TOKEN_TTL"]) == "admin"
    assert auth_service.verify_token(token, now=1001 + app.config["ADMIN_TOKEN_TTL"]) is None


def test_tampered_token_rejected(app):
    token = auth_service.issue_token("admin")
    user, issued_at, signature = token.split(".")
    assert auth_service.verify_token(f"{user}.{int(issued_at) + 60}.{signature}") is None
    assert auth_service.verify_token("garbage") is None


def test_change_credentials(client, db, auth_headers):
    resp = client.post(
        "/api/admin/credentials",
        json={"username": "owner", "password": "short"},
        headers=auth_headers,
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/admin/credentials",
        json={"username": "owner", "password": "long-enough-pass"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert login(client).status_code == 401
    assert login(client, "owner", "long-enough-pass").status_code == 200


def test_credentials_require_auth(client, db):
    resp = client.post("/api/admin/credentials", json={"username": "x", "password": "12345678"})
    assert resp.status_code == 401


def test_admin_health(client, db, auth_headers):
    assert client.get("/api/admin/health").status_code == 401

    data = client.get("/api/admin/health", headers=auth_headers).get_json()
    assert data["store"] is False
    assert data["segments"]["products"] is False
    assert data["ai"] is False
    assert "timestamp" in data


def test_quote_inbox_and_status(client, db, auth_headers):
    quote = quote_service.submit_quote({
        "type": "quote",
        "contact": {"name": "Ana", "email": "ana@example.com"},
        "items": [{"product": {"name": "Tee"}, "color": "White", "sizeQuantities": {"S": 5}}],
    })

    data = client.get("/api/admin/quotes?kind=quotes", headers=auth_headers).get_json()
    assert [q["id"] for q in data["quotes"]] == [quote.id]
    assert data["quotes"][0]["contact"]["email"] == "ana@example.com"

    resp = client.post(
        f"/api/admin/quotes/{quote.id}/status", json={"status": "In Progress"}, headers=auth_headers
    )
    assert resp.get_json()["status"] == "In Progress"

    resp = client.post(
        f"/api/admin/quotes/{quote.id}/status", json={"status": "Lost"}, headers=auth_headers
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/admin/quotes/QT-0000/status", json={"status": "New"}, headers=auth_headers
    )
    assert resp.status_code == 404


def test_stats(client, db, auth_headers):
    data = client.get("/api/admin/stats", headers=auth_headers).get_json()
    assert data == {"total": 0, "orders": 0, "quotes": 0, "new": 0, "products": 0}


def test_health(client, db):
    resp = client.get("/health")
    assert resp.status_code in (200, 503)
    data = resp.get_json()
    assert "status" in data


def test_health_does_not_leak_internal_errors(client, db, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("database password leaked")

    monkeypatch.setattr(ext.db.session, "execute", boom)

    resp = client.get("/health")
    assert resp.status_code == 503
    data = resp.get_json()
    assert data["db"] == "error"
    assert "password" not in str(data).lower()
