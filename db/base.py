"""
db/base.py

Declarative base and shared column types for all SQLAlchemy models.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, mapped_column

# JSONB on PostgreSQL, plain JSON elsewhere (in-memory SQLite test engines).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """
    Project-wide declarative base.
    All models must inherit from this class.
    """

    type_annotation_map: dict[type, Any] = {
        datetime: DateTime(timezone=True),
    }


def timestamp_column(*, comment: str | None = None) -> Any:
    """
    Non-null timezone-aware timestamp defaulting to the database clock.
    """

    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment=comment,
    )
