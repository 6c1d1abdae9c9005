"""Core Layer — pure domain logic, no IO, no HTTP, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: aggregation over an
      already-fetched collection is tested without any transport
"""
