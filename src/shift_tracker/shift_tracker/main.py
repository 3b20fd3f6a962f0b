from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.enums import RecordStoreBackend
from .database.bootstrap import apply_schema, list_tables
from .shifts.controller import register as register_shifts

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

log = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    backend = str(getattr(settings, "RECORD_STORE", RecordStoreBackend.FIRESTORE.value))
    if container is None:
        container = build_container(
            backend=backend,
            firebase_config=dict(getattr(settings, "FIREBASE_CONFIG", {})),
            db_config=getattr(settings, "DB_CONFIG", None),
            resume_open_shift=bool(getattr(settings, "RESUME_OPEN_SHIFT", True)),
        )
    log.info("settings=%s record_store=%s", settings_module, backend)

    if container.db_conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.db_conn, schema_path=schema_path)
        log.info("schema ready (tables=%d)", len(list_tables(container.db_conn)))

    register_shifts(app, container)

    return app
