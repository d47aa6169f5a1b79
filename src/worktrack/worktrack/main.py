from __future__ import annotations

import importlib
import logging
import sys
from typing import Optional

import requests
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import Clock
from .common.web import register_error_handlers
from .container import build_container
from .assignments.controller import register as register_assignments
from .staff.controller import register as register_staff
from .submissions.controller import register as register_submissions
from .work_calendar.controller import register as register_calendar

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger unless one is already configured."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))


def create_app(*, clock: Optional[Clock] = None, session: Optional[requests.Session] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    api_config = getattr(settings, "API_CONFIG")

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logging.getLogger(__name__).info("worktrack starting (settings=%s api=%s)", settings_module, api_config.get("base_url"))

    container = build_container(
        api_config=api_config,
        timezone=getattr(settings, "TIMEZONE", "UTC"),
        analytics_days=int(getattr(settings, "ANALYTICS_DAYS", 30)),
        clock=clock,
        session=session,
    )
    app.extensions["worktrack"] = container

    register_error_handlers(app)
    register_submissions(app, container)
    register_staff(app, container)
    register_assignments(app, container)
    register_calendar(app, container)

    return app
