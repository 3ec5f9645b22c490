"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (visitor/admin input, API responses)
    - Domain enums from core/ used for outcome and failure kind fields
"""
