"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate shape and types at the system boundary
    - Business field rules (patterns, lengths, dob in past) live in core/validate_fields.py
"""
