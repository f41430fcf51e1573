"""
auth.py

Authentication capability handed to every admin handler.

`authenticator.admin(request)` returns an AdminContext carrying the shop
session and an Admin GraphQL client. Handlers never reach for a global
client; tests inject their own authenticator through create_app().
"""

from __future__ import annotations
from dataclasses import dataclass
from urllib.parse import urlparse

from api.shopify_client import ShopifyClient


@dataclass(frozen=True)
class ShopSession:
    shop: str


@dataclass(frozen=True)
class AdminContext:
    session: ShopSession
    admin: ShopifyClient


class EnvAuthenticator:
    """
    Single-shop authenticator backed by the offline access token in .env.
    The client (and its requests.Session) is built on first use and reused.
    """

    def __init__(self, client: ShopifyClient | None = None):
        self._client = client

    def admin(self, request) -> AdminContext:
        if self._client is None:
            self._client = ShopifyClient()
        shop = urlparse(self._client.shop_url).hostname or self._client.shop_url
        return AdminContext(session=ShopSession(shop=shop), admin=self._client)
