"""Services Layer — orchestration between the upstream client and pure core logic.

Invariants:
    - Services never build HTTP requests themselves (client owns the wire)
    - Aggregation delegated to core/ pure functions

Design Decisions:
    - Client injected through a Protocol: tests pass a scripted fake, no transport needed
"""
