"""Infrastructure Layer — external client adapters, persistence and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - Client failures mapped to tagged outcomes, DB failures to DatabaseError

Design Decisions:
    - Thin adapters over raw clients and sessions (single responsibility)
"""
