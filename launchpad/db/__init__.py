"""Database Infrastructure — SQLAlchemy declarative Base for the catalog and order tables.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""
