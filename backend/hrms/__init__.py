"""HRMS Personnel Records Package - employee lifecycle and identity enforcement.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
