"""Infrastructure Layer - database wiring and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
