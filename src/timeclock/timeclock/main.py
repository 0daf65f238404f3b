from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .events.controller import register as register_events
from .payroll.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .settings.controller import register as register_settings
from .users.controller import register as register_users
from .vacation.controller import register as register_vacation

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")
    backend = getattr(settings, "STORAGE_BACKEND", "memory")

    logger.info("settings=%s backend=%s", settings_module, backend)

    if backend == "mysql":
        logger.debug(
            "db=%s@%s:%s/%s",
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)

    container = build_container(
        db_config=db_config,
        storage_backend=backend,
        session_hours=int(getattr(settings, "SESSION_TTL_HOURS", 12)),
    )
    app.extensions["timeclock"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_events(app, container)
    register_reports(app, container)
    register_attendance(app, container)
    register_schedules(app, container)
    register_settings(app, container)
    register_vacation(app, container)

    return app
