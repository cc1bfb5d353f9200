"""Database Package — declarative base and standalone session factory.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
    - All sessions are async (AsyncSession)
"""
