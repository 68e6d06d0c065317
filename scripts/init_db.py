from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from attendance_tracker.config import get_settings_module
from attendance_tracker.database.bootstrap import apply_schema
from attendance_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    executed = apply_schema(DatabaseConnection.get_instance(config))
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} ({executed} statements)")


if __name__ == "__main__":
    main()
