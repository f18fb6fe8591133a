"""Core Layer — pure catalog domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: slug normalization and guard
      decisions are pure, store lookups happen in services/
"""
