import pytest
from storefront import create_app
from storefront.extensions import db as _db
from storefront.services.auth_service import issue_token


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    """Per-test database; services commit, so tables are emptied afterwards."""
    with app.app_context():
        yield _db
        _db.session.rollback()
        for table in reversed(_db.metadata.sorted_tables):
            _db.session.execute(table.delete())
        _db.session.commit()


@pytest.fixture
def auth_headers(app):
    return {"Authorization": f"Bearer {issue_token(app.config['ADMIN_USERNAME'])}"}


@pytest.fixture
def jersey():
    return {
        "name": "Pro Jersey",
        "description": "Mesh jersey",
        "category": "Jersey",
        "categoryGroup": "Team Wear",
        "gender": "Unisex",
        "availableColors": [
            {"name": "Black", "hex": "#000000"},
            {"name": "Red", "hex": "#ff0000"},
        ],
        "imageUrls": {"Black": ["https://img.test/black-1.jpg"], "Red": []},
        "availableSizes": [
            {"name": "M", "width": 51, "length": 72},
            {"name": "L", "width": 54, "length": 74},
        ],
        "features": [{"name": "Fabric", "value": "Mesh"}],
        "supportedPrinting": ["Sublimation"],
        "moq": 24,
        "leadTimeWeeks": 2,
    }
