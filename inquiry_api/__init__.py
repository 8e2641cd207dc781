"""Inquiry API Package - customer inquiry CRUD service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
