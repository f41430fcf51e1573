import json

from api.payment_customizations import (
    DEFAULT_CONFIGURATION,
    build_customization_input,
    load_configuration,
    save_configuration,
)
from tests.fakes import FakeAdmin, FakeAuthenticator


def test_load_new_uses_defaults_without_remote_call(authenticator, fake_admin):
    configuration = load_configuration(authenticator, object(), "new")

    assert configuration == {"paymentMethodName": "Afterpay", "productHandles": "no-afterpay"}
    assert fake_admin.calls == []
    assert authenticator.requests == []


def test_load_new_returns_a_copy(authenticator):
    configuration = load_configuration(authenticator, object(), "new")
    configuration["paymentMethodName"] = "Klarna"
    assert DEFAULT_CONFIGURATION["paymentMethodName"] == "Afterpay"


def test_load_existing_reads_metafield():
    stored = {"paymentMethodName": "Klarna", "productHandles": "gift-card,final-sale"}
    admin = FakeAdmin(customization={
        "id": "gid://shopify/PaymentCustomization/42",
        "metafield": {"value": json.dumps(stored)},
    })

    configuration = load_configuration(FakeAuthenticator(admin), object(), "42")

    assert configuration == stored
    assert admin.calls == [("get", "gid://shopify/PaymentCustomization/42")]


def test_load_missing_customization_falls_back_to_defaults():
    admin = FakeAdmin(customization=None)
    assert load_configuration(FakeAuthenticator(admin), object(), "42") == DEFAULT_CONFIGURATION


def test_load_missing_metafield_falls_back_to_defaults():
    admin = FakeAdmin(customization={"id": "gid://shopify/PaymentCustomization/42", "metafield": None})
    assert load_configuration(FakeAuthenticator(admin), object(), "42") == DEFAULT_CONFIGURATION


def test_load_unparseable_metafield_falls_back_to_defaults(caplog):
    admin = FakeAdmin(customization={
        "id": "gid://shopify/PaymentCustomization/42",
        "metafield": {"value": "{oops"},
    })

    assert load_configuration(FakeAuthenticator(admin), object(), "42") == DEFAULT_CONFIGURATION
    assert "unparseable configuration" in caplog.text


def test_load_defaults_each_missing_field():
    admin = FakeAdmin(customization={
        "id": "gid://shopify/PaymentCustomization/42",
        "metafield": {"value": json.dumps({"paymentMethodName": "Klarna"})},
    })

    configuration = load_configuration(FakeAuthenticator(admin), object(), "42")

    assert configuration == {"paymentMethodName": "Klarna", "productHandles": "no-afterpay"}


def test_build_customization_input():
    customization_input = build_customization_input("fn-123", "Afterpay", "no-afterpay")

    assert customization_input["functionId"] == "fn-123"
    assert customization_input["title"] == "Hide Afterpay if cart contains a products with a set handle"
    assert customization_input["enabled"] is True
    metafield, = customization_input["metafields"]
    assert metafield["namespace"] == "$app:payment-customization"
    assert metafield["key"] == "function-configuration"
    assert metafield["type"] == "json"
    assert json.loads(metafield["value"]) == {"paymentMethodName": "Afterpay", "productHandles": "no-afterpay"}


def test_save_new_creates(authenticator, fake_admin):
    form = {"paymentMethodName": "Afterpay", "productHandles": "no-afterpay"}

    errors = save_configuration(authenticator, object(), "fn-123", "new", form)

    assert errors == []
    assert [call[0] for call in fake_admin.calls] == ["create"]
    assert fake_admin.calls[0][1] == build_customization_input("fn-123", "Afterpay", "no-afterpay")


def test_save_existing_updates_and_never_creates(authenticator, fake_admin):
    form = {"paymentMethodName": "Klarna", "productHandles": "gift-card"}

    errors = save_configuration(authenticator, object(), "fn-123", "42", form)

    assert errors == []
    assert len(fake_admin.calls) == 1
    action, gid, customization_input = fake_admin.calls[0]
    assert action == "update"
    assert gid == "gid://shopify/PaymentCustomization/42"
    assert customization_input["functionId"] == "fn-123"


def test_save_returns_user_errors():
    user_errors = [{"field": ["paymentCustomization", "functionId"], "message": "Function not found."}]
    admin = FakeAdmin(user_errors=user_errors)

    errors = save_configuration(FakeAuthenticator(admin), object(), "fn-123", "new", {})

    assert errors == user_errors
