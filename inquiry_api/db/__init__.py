"""Database Package - declarative Base, standalone session factory and seed data.

Invariants:
    - All sessions are async (AsyncSession)
"""
