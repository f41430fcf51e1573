"""
payment_customizations.py

Loader/action logic behind the payment customization form.

- load_configuration: reads the function configuration stored in the
  customization's metafield (or the defaults for a new customization)
- save_configuration: creates or updates the customization and returns
  the userErrors Shopify reports (empty list = saved)

Both take the authenticator capability and the incoming request so the
admin client is only resolved when a remote call is actually needed.
"""

import json
import logging

from api.shopify_client import (
    PAYMENT_CUSTOMIZATION_KEY,
    PAYMENT_CUSTOMIZATION_NAMESPACE,
    payment_customization_gid,
)

NEW_CUSTOMIZATION_ID = "new"

DEFAULT_CONFIGURATION = {
    "paymentMethodName": "Afterpay",
    "productHandles": "no-afterpay",
}


def load_configuration(authenticate, request, customization_id: str) -> dict:
    # Nothing is stored yet for a new customization.
    if customization_id == NEW_CUSTOMIZATION_ID:
        return dict(DEFAULT_CONFIGURATION)

    admin = authenticate.admin(request).admin
    customization = admin.get_payment_customization(payment_customization_gid(customization_id))

    stored = {}
    raw_value = ((customization or {}).get("metafield") or {}).get("value")
    if raw_value:
        try:
            stored = json.loads(raw_value)
        except json.JSONDecodeError as e:
            logging.warning(f"Ignoring unparseable configuration on customization {customization_id}: {e}")
            stored = {}
    if not isinstance(stored, dict):
        stored = {}

    return {
        key: stored.get(key) if stored.get(key) is not None else default
        for key, default in DEFAULT_CONFIGURATION.items()
    }


def build_customization_input(function_id: str, payment_method_name, product_handles) -> dict:
    return {
        "functionId": function_id,
        "title": f"Hide {payment_method_name} if cart contains a products with a set handle",
        "enabled": True,
        "metafields": [
            {
                "namespace": PAYMENT_CUSTOMIZATION_NAMESPACE,
                "key": PAYMENT_CUSTOMIZATION_KEY,
                "type": "json",
                "value": json.dumps({
                    "paymentMethodName": payment_method_name,
                    "productHandles": product_handles,
                }),
            }
        ],
    }


def save_configuration(authenticate, request, function_id: str, customization_id: str, form) -> list:
    """
    Persist the submitted form as the customization's function configuration.

    Parameters:
        form: mapping with `paymentMethodName` and `productHandles`

    Returns:
        list of userErrors ({"field": ..., "message": ...}); empty on success
    """
    admin = authenticate.admin(request).admin

    customization_input = build_customization_input(
        function_id,
        form.get("paymentMethodName"),
        form.get("productHandles"),
    )

    if customization_id == NEW_CUSTOMIZATION_ID:
        result = admin.create_payment_customization(customization_input)
        action = "create"
    else:
        result = admin.update_payment_customization(
            payment_customization_gid(customization_id), customization_input
        )
        action = "update"

    errors = result.get("userErrors") or []
    if errors:
        logging.info(f"Payment customization {action} returned {len(errors)} user error(s)")
    else:
        saved_id = (result.get("paymentCustomization") or {}).get("id")
        logging.info(f"Payment customization {action} OK: {saved_id}")
    return errors
