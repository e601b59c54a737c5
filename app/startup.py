"""
app/startup.py

Boot-time checks run from the application lifespan. Nothing here migrates
or repairs the database; a failed check aborts startup.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from db.models.assigned_kpi import AssignedKpi
from db.models.kpi import Kpi

logger = logging.getLogger(__name__)

# Tables the KPI endpoints read or write.
REQUIRED_TABLES: tuple[str, ...] = (Kpi.__tablename__, AssignedKpi.__tablename__)


def check_database(engine: Engine) -> None:
    """
    Run ``SELECT 1``. Raises RuntimeError if the database is unreachable.
    """

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def find_missing_tables(engine: Engine, required: Iterable[str] = REQUIRED_TABLES) -> list[str]:
    present = set(inspect(engine).get_table_names())
    return sorted(set(required) - present)


def check_schema(engine: Engine, required: Iterable[str] = REQUIRED_TABLES) -> None:
    """
    Require the ``kpi`` and ``assigned_kpi`` tables to exist.
    """

    missing = find_missing_tables(engine, required)
    if not missing:
        return

    logger.critical(
        "KPI tables absent from the database: %s. Run 'alembic upgrade head' and restart.",
        ", ".join(missing),
    )
    raise RuntimeError(
        f"Missing KPI table(s): {', '.join(missing)}. Run migrations and restart."
    )
