"""User API Package — CRUD service for the User resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
