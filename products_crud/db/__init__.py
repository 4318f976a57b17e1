"""Database Layer: declarative base shared by ORM models and migrations.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
