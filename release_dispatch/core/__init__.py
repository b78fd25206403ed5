"""Core Layer — pure dispatch logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/ or db/
    - All functions are pure and deterministic; PassContext is the only mutable state
      and it lives for exactly one pass

Design Decisions:
    - Functional core separated from imperative shell: the async loop in
      services/process_decisions.py owns every collaborator call
"""
