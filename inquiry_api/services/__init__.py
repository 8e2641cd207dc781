"""Services Layer - inquiry use cases and their SQLAlchemy repository.

Invariants:
    - Services depend on the InquiryRepository protocol, not on AsyncSession
"""
