"""Infrastructure Layer — SQL collaborators, database plumbing and logging.

Invariants:
    - Collaborators implement the Protocols in core/repository_protocols.py
    - Collaborators never commit: the unit of work owns the transaction
    - Domain failures raised as VaultError subclasses from core/errors.py

Design Decisions:
    - One module per collaborator family (gate, ledger, registries, stores)
"""
