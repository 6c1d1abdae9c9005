"""Infrastructure Layer — upstream client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every upstream call wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrapper over raw httpx.Client: retry policy lives in one place
"""
