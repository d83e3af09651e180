"""Form Builder Application Package — form-schema editing engine and API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
