#!/usr/bin/env python3
"""
run.py

Payment customization function: hides the configured payment method
when the cart contains a product whose handle is listed in the
configuration stored on the customization's metafield.

Input and output follow the platform's function schema:

    input:  {"cart": {"lines": [...]}, "paymentMethods": [...],
             "paymentCustomization": {"metafield": {"value": "<json>"}}}
    output: {"operations": [{"hide": {"paymentMethodId": "..."}}]}

Usage:
    python -m payment_function.run --input input.json
    cat input.json | python -m payment_function.run
"""

import argparse
import json
import logging
import sys

from utils.logging_config import setup_logging


def no_changes() -> dict:
    return {"operations": []}


def run(input_data: dict) -> dict:
    metafield = (input_data.get("paymentCustomization") or {}).get("metafield") or {}
    raw_value = metafield.get("value")
    configuration = json.loads(raw_value if raw_value is not None else "{}")
    if not isinstance(configuration, dict):
        return no_changes()

    payment_method_name = configuration.get("paymentMethodName")
    product_handles = configuration.get("productHandles")
    if not payment_method_name or not product_handles:
        return no_changes()

    # Bail if no matching product handles are found.
    # NOTE: containment against the raw string, so "afterpay" matches "no-afterpay".
    lines = (input_data.get("cart") or {}).get("lines") or []
    has_matching_product = any(
        line["merchandise"].get("__typename") == "ProductVariant"
        and line["merchandise"]["product"]["handle"] in product_handles
        for line in lines
    )
    if not has_matching_product:
        logging.error("Cart does not contain a product with a matching handle")
        return no_changes()

    hide_payment_method = next(
        (method for method in input_data.get("paymentMethods") or []
         if str(payment_method_name) in method["name"]),
        None,
    )
    if hide_payment_method is None:
        return no_changes()

    return {
        "operations": [
            {
                "hide": {
                    "paymentMethodId": hide_payment_method["id"],
                },
            },
        ],
    }


def main(input_path: str | None = None) -> dict:
    if input_path:
        with open(input_path, "r") as f:
            input_data = json.load(f)
    else:
        input_data = json.load(sys.stdin)

    result = run(input_data)
    print(json.dumps(result))
    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the hide-payment-method function against an input document.")
    parser.add_argument("--input", help="Path to the function input JSON (defaults to stdin).")
    args = parser.parse_args()

    setup_logging()
    main(args.input)
