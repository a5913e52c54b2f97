import pytest

from number_server import create_app
from number_server.state import NumberStore


@pytest.fixture
def store():
    """Five numbers, two per page by default, test number "T"."""
    return NumberStore(["a", "b", "c", "d", "e"], "hello", default_fetch_count=2, test_number="T")


@pytest.fixture
def app(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
