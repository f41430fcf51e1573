#!/usr/bin/env python3
"""
shopify_client.py
Central Admin GraphQL helper for the hide-payment-method app.
Reads SHOP_URL, SHOPIFY_ACCESS_TOKEN, API_VERSION from .env
and exposes a `ShopifyClient` class.
"""

import os, time, requests
from dotenv import load_dotenv

load_dotenv()

PAYMENT_CUSTOMIZATION_NAMESPACE = "$app:payment-customization"
PAYMENT_CUSTOMIZATION_KEY = "function-configuration"


def payment_customization_gid(customization_id: str) -> str:
    return f"gid://shopify/PaymentCustomization/{customization_id}"


class ShopifyClient:
    def __init__(self, shop_url: str | None = None, token: str | None = None, api_version: str | None = None):
        self.shop_url = (shop_url or os.getenv("SHOP_URL", "")).rstrip("/")
        self.token = token or os.getenv("SHOPIFY_ACCESS_TOKEN")
        self.api_version = api_version or os.getenv("API_VERSION", "2025-10")
        if not all([self.shop_url, self.token]):
            raise EnvironmentError("Missing SHOP_URL or SHOPIFY_ACCESS_TOKEN in .env")

        self.endpoint = f"{self.shop_url}/admin/api/{self.api_version}/graphql.json"
        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.token,
        })

    # ------------------------------------------------------------------
    def graphql(self, query: str, variables: dict | None = None):
        """Perform a GraphQL POST with throttle awareness."""
        payload = {"query": query, "variables": variables or {}}
        resp = self.session.post(self.endpoint, json=payload)
        if resp.status_code != 200:
            raise RuntimeError(f"GraphQL HTTP {resp.status_code}: {resp.text}")

        data = resp.json()
        throttle = data.get('extensions', {}).get('cost', {}).get('throttleStatus')
        if throttle and throttle.get('currentlyAvailable', 0) < 1000:
            time.sleep(2)
        return data

    def _raise_for_errors(self, resp: dict):
        if 'errors' in resp:
            error_message = resp['errors'][0]['message']
            raise RuntimeError(f"GraphQL API Error: {error_message}")

    # ------------------------------------------------------------------
    # --- Payment customizations (Used by the admin app) ---
    # ------------------------------------------------------------------

    def get_payment_customization(self, customization_gid: str) -> dict | None:
        """
        Fetches a payment customization and its function configuration metafield.
        Returns the node, or None when Shopify has no customization with that GID.
        """
        query = """
        query getPaymentCustomization($id: ID!, $namespace: String!, $key: String!) {
          paymentCustomization(id: $id) {
            id
            metafield(namespace: $namespace, key: $key) {
              value
            }
          }
        }
        """
        variables = {
            "id": customization_gid,
            "namespace": PAYMENT_CUSTOMIZATION_NAMESPACE,
            "key": PAYMENT_CUSTOMIZATION_KEY,
        }
        resp = self.graphql(query, variables)
        self._raise_for_errors(resp)
        return (resp.get("data") or {}).get("paymentCustomization")

    def create_payment_customization(self, customization_input: dict) -> dict:
        """
        Creates a payment customization.
        userErrors are returned to the caller rather than raised.
        """
        mutation = """
        mutation createPaymentCustomization($input: PaymentCustomizationInput!) {
          paymentCustomizationCreate(paymentCustomization: $input) {
            paymentCustomization {
              id
            }
            userErrors {
              field
              message
            }
          }
        }
        """
        resp = self.graphql(mutation, {"input": customization_input})
        self._raise_for_errors(resp)
        return (resp.get("data") or {}).get("paymentCustomizationCreate") or {}

    def update_payment_customization(self, customization_gid: str, customization_input: dict) -> dict:
        """
        Updates an existing payment customization, including its metafields.
        userErrors are returned to the caller rather than raised.
        """
        mutation = """
        mutation updatePaymentCustomization($id: ID!, $input: PaymentCustomizationInput!) {
          paymentCustomizationUpdate(id: $id, paymentCustomization: $input) {
            paymentCustomization {
              id
            }
            userErrors {
              field
              message
            }
          }
        }
        """
        variables = {"id": customization_gid, "input": customization_input}
        resp = self.graphql(mutation, variables)
        self._raise_for_errors(resp)
        return (resp.get("data") or {}).get("paymentCustomizationUpdate") or {}
