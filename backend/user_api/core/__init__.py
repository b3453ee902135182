"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - Checks return error values instead of raising

Design Decisions:
    - Functional core separated from imperative shell
"""
