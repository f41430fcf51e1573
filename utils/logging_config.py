"""Shared logging setup for the admin app and the function runner."""

import logging


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )
