#!/usr/bin/env python3
"""
app.py

Flask app factory for the hide-payment-method admin UI.

Usage:
    flask --app "admin_app.app:create_app()" run
"""

import os

from flask import Flask
from dotenv import load_dotenv

from admin_app.auth import EnvAuthenticator
from admin_app.routes import bp
from utils.logging_config import setup_logging

load_dotenv()


def create_app(authenticator=None, config: dict | None = None) -> Flask:
    setup_logging()

    app = Flask(__name__)
    app.config.from_mapping(
        SECRET_KEY=os.getenv("FLASK_SECRET_KEY", "dev"),
    )
    if config:
        app.config.from_mapping(config)

    app.extensions["authenticator"] = authenticator or EnvAuthenticator()
    app.register_blueprint(bp)
    return app
