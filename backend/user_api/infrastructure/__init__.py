"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure may import core/, never api/
    - All database failures surface as DatabaseError

Design Decisions:
    - Session manager and repository are plain classes injected via FastAPI dependencies
"""
