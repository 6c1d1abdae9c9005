"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; failures use the error envelope from core/errors.py

Design Decisions:
    - Thin routes delegate to EmployeeService
"""
