"""
Poker Study Backend — Application Package Initializer
=====================================================

What: Marks the `pokerstudy` directory as a Python package.
Why:  Enables module imports like `from pokerstudy.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows the same layered split for every resource
    (players, hands to review, reviewers, claimed users, mental game, backup):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Defaults, merging, auth checks
    ├─────────────────────────────────────┤
    │  Validation / Models / Schemas      │  ← Entity rules, ORM, API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Beside the layers sit two pure helpers with no I/O at all:
    - text.normalizer:      collapses multiline hand histories into one line
    - text.hand_templates:  the read-only catalog of note templates
"""

__version__ = "1.0.0"
