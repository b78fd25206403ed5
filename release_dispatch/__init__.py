"""release_dispatch — single-pass download decision dispatch and quarantine engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
