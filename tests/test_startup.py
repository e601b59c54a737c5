"""
tests/test_startup.py

Boot-time database checks against in-memory SQLite engines.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.startup import REQUIRED_TABLES, check_database, check_schema, find_missing_tables
from db.base import Base
from db.models.kpi import Kpi


@pytest.fixture()
def engine() -> Iterator[Engine]:
    sqlite = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield sqlite
    sqlite.dispose()


def test_required_tables_are_the_kpi_tables() -> None:
    assert REQUIRED_TABLES == ("kpi", "assigned_kpi")


def test_check_database_passes_on_reachable_engine(engine) -> None:
    check_database(engine)


def test_check_database_wraps_connection_errors() -> None:
    broken = create_engine("sqlite:////nonexistent-dir/kpi.db")
    with pytest.raises(RuntimeError, match="Database unavailable"):
        check_database(broken)


def test_check_schema_passes_when_tables_exist(engine) -> None:
    Base.metadata.create_all(engine)
    assert find_missing_tables(engine) == []
    check_schema(engine)


def test_check_schema_reports_missing_tables(engine) -> None:
    assert find_missing_tables(engine) == ["assigned_kpi", "kpi"]
    with pytest.raises(RuntimeError, match="assigned_kpi, kpi"):
        check_schema(engine)


def test_partial_schema_lists_only_absent_table(engine) -> None:
    Kpi.__table__.create(engine)
    assert find_missing_tables(engine) == ["assigned_kpi"]
