from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.web import register_error_handlers
from .container import build_container, build_store
from .core.constants import DEFAULT_ACADEMIC_YEAR, SEMESTER_FEE
from .dashboard.controller import register as register_dashboard
from .exams.controller import register as register_exams
from .fees.controller import register as register_fees
from .storage.bootstrap import apply_schema, list_tables
from .storage.repository import RecordStore
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers


def create_app(*, settings_module: Optional[str] = None, store: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG", None)
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql"))

    if store is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        store = build_store(backend=backend, db_config=db_config)

    if app.config["DEBUG"] and backend == "mysql" and db_config:
        app.logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    container = build_container(
        store=store,
        admin_username=str(getattr(settings, "ADMIN_USERNAME", "admin")),
        admin_password=str(getattr(settings, "ADMIN_PASSWORD", "1234")),
        semester_fee=getattr(settings, "SEMESTER_FEE", SEMESTER_FEE),
        academic_year=str(getattr(settings, "ACADEMIC_YEAR", DEFAULT_ACADEMIC_YEAR)),
    )
    app.extensions["school_admin"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_dashboard(app, container)
    register_students(app, container)
    register_teachers(app, container)
    register_attendance(app, container)
    register_exams(app, container)
    register_fees(app, container)

    return app
