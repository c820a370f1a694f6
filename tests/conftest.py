import pytest

from app import create_app
from models import db


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_order(client):
    """Create an order over the API and return its JSON body."""
    def _make_order(**fields):
        response = client.post('/orders', json=fields)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make_order
