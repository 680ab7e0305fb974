"""Infrastructure Layer - database, file storage and cross-cutting concerns.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - All SQLAlchemy and OS errors are mapped to core/errors.py types
"""
