"""
routes.py

Admin pages: the app index and the payment customization form.
"""

from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for

from api.payment_customizations import load_configuration, save_configuration

PAYMENT_CUSTOMIZATIONS_URL = "shopify:admin/settings/payments/customizations"

bp = Blueprint("admin", __name__)


def _authenticator():
    return current_app.extensions["authenticator"]


@bp.get("/")
def root():
    return redirect(url_for("admin.index"))


@bp.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


@bp.get("/app")
def index():
    session = _authenticator().admin(request).session
    return render_template("index.html", shop=session.shop.replace(".myshopify.com", ""))


@bp.route("/app/payment-customization/<function_id>/<customization_id>", methods=["GET", "POST"])
def payment_customization(function_id: str, customization_id: str):
    authenticator = _authenticator()

    if request.method == "POST":
        errors = save_configuration(authenticator, request, function_id, customization_id, request.form)
        # Re-render with what the merchant typed, not what is stored.
        form = {
            "paymentMethodName": request.form.get("paymentMethodName", ""),
            "productHandles": request.form.get("productHandles", ""),
        }
        return render_template(
            "payment_customization.html",
            form=form,
            errors=errors,
            submitted=True,
            customizations_url=PAYMENT_CUSTOMIZATIONS_URL,
        )

    form = load_configuration(authenticator, request, customization_id)
    return render_template(
        "payment_customization.html",
        form=form,
        errors=[],
        submitted=False,
        customizations_url=PAYMENT_CUSTOMIZATIONS_URL,
    )
