"""Services Layer — exchange coordinator, transaction runner and read queries.

Invariants:
    - The coordinator depends only on core Protocols
    - Only exchange_runner opens a unit of work

Design Decisions:
    - One file per concern for locality (coordinator / runner / queries)
"""
