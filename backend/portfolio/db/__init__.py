"""Database Metadata — SQLAlchemy declarative base.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
