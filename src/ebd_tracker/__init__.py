"""EBD Tracker package.

Church-school (EBD) attendance and offering tracker. Organized by feature modules
(classes, students, reports, finance) with a thin Flask controller layer over
service/repository layers.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .classes.controller import register as register_classes
from .common.http_errors import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .finance.controller import register as register_finance
from .reports.controller import register as register_reports
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    public_dir = Path(getattr(settings, "PUBLIC_DIR", REPO_ROOT / "public"))
    app = Flask(__name__, static_folder=str(public_dir), static_url_path="")
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    register_error_handlers(app)

    @app.route("/", methods=["GET"], endpoint="health")
    def health():
        if (public_dir / "index.html").is_file():
            return app.send_static_file("index.html")
        return "API Online"

    register_classes(app, container)
    register_students(app, container)
    register_reports(app, container)
    register_finance(app, container)

    return app
