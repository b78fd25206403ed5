"""Services Layer — async orchestration around the pure core.

Invariants:
    - Every collaborator call is awaited in scan order; no concurrency inside a pass
    - Services hold no state between passes

Design Decisions:
    - process_decisions.py owns the loop, dispatch_pass.py owns the DB session
"""
