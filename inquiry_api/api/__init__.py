"""API Layer - FastAPI routes, response envelopes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return {success, message, data?, error(s)?} envelopes

Design Decisions:
    - Thin routes delegate to services and render the returned Outcome
"""
