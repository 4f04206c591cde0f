from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_current_semester, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .requests.controller import register as register_requests
from .semesters.controller import register as register_semesters
from .subjects.controller import register as register_subjects

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    default_threshold = float(getattr(settings, "ATTENDANCE_THRESHOLD_DEFAULT", DEFAULT_ATTENDANCE_THRESHOLD))

    auto_init_db = bool(getattr(settings, "AUTO_INIT_DB", False))
    auto_seed_db = bool(getattr(settings, "AUTO_SEED_DB", False))
    if auto_init_db:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if auto_seed_db:
        seed_path = Path(__file__).resolve().parents[3] / "database" / "seed.sql"
        apply_seed_sql(db_config, seed_path=seed_path)
        ensure_current_semester(db_config, attendance_threshold=default_threshold)
        logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        default_threshold=default_threshold,
        medical_counts_as_present=bool(getattr(settings, "MEDICAL_COUNTS_AS_PRESENT", False)),
    )

    register_attendance(app, container)
    register_requests(app, container)
    register_semesters(app, container)
    register_subjects(app, container)

    return app
