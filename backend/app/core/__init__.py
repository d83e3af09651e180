"""Core Layer — pure form-schema logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Transitions are pure and deterministic given the injected id factory

Design Decisions:
    - Functional core separated from imperative shell: every mutation returns the next
      state together with the notifications it produced
"""
