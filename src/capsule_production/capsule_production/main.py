from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_clock_time
from .common.logging_utils import configure_logging
from .container import Container, build_container
from .orders.controller import register as register_orders
from .worklogs.controller import register as register_worklogs

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), name=__package__)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            lunch_start=parse_clock_time(getattr(settings, "LUNCH_START", "12:30")),
            lunch_end=parse_clock_time(getattr(settings, "LUNCH_END", "13:30")),
            ranking_soft_limit=int(getattr(settings, "RANKING_SOFT_LIMIT", 5000)),
        )
    logger.info("capsule-production started (settings=%s)", settings_module)

    register_orders(app, container)
    register_worklogs(app, container)

    return app
