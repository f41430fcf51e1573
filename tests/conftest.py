import pytest

from api.shopify_client import ShopifyClient
from tests.fakes import FakeAdmin, FakeAuthenticator, FakeResponse, FakeSession


@pytest.fixture
def fake_admin():
    return FakeAdmin()


@pytest.fixture
def authenticator(fake_admin):
    return FakeAuthenticator(fake_admin)


@pytest.fixture
def client_with_session():
    def _build(*payloads):
        client = ShopifyClient(shop_url="https://demo-shop.myshopify.com/", token="shpat_test", api_version="2025-10")
        client.session = FakeSession([
            p if isinstance(p, FakeResponse) else FakeResponse(p) for p in payloads
        ])
        return client
    return _build


@pytest.fixture
def flask_app(authenticator):
    from admin_app.app import create_app

    return create_app(authenticator=authenticator, config={"TESTING": True})


@pytest.fixture
def http(flask_app):
    return flask_app.test_client()
