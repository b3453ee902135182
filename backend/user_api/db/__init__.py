"""Database Metadata — declarative Base shared by all ORM models.

Invariants:
    - Base is the single source of truth for table metadata
"""
