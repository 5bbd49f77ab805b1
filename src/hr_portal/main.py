from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.logging_setup import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .attendance_settings.controller import register as register_attendance_settings
from .biometrics.controller import register as register_biometrics
from .broadcasting.controller import register as register_broadcasting
from .calendar_events.controller import register as register_calendar_events
from .documents.controller import register as register_documents
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=PROJECT_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=PROJECT_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=settings)

    app.extensions["hr_portal"] = container

    register_users(app, container)
    register_attendance_settings(app, container)
    register_attendance(app, container)
    register_biometrics(app, container)
    register_documents(app, container)
    register_broadcasting(app, container)
    register_calendar_events(app, container)

    return app
