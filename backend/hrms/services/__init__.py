"""Services Layer - lifecycle, uniqueness, code generation and document association.

Invariants:
    - Services talk to storage only through core/repository_protocols.py
    - Every mutating operation runs inside exactly one store.atomic() block
"""
