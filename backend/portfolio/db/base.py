"""SQLAlchemy Declarative Base — shared base class and metadata for all ORM models.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for table metadata (Alembic
      autogenerate reads it)
    - Constraint names follow PostgreSQL's own defaults, so names produced by
      migrations and by metadata.create_all (tests) agree

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}


class Base(DeclarativeBase):
    """Base class for all portfolio ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
