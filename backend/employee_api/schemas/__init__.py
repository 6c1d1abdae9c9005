"""Pydantic Schemas — upstream wire format and inbound request validation.

Invariants:
    - Schemas validate at system boundaries (inbound requests, upstream responses)
    - No IO, no business logic

Design Decisions:
    - Upstream field names kept as aliases: one model serves both directions
"""
