"""
Todo REST Backend — Application Package Initializer
=====================================================

What: Marks the `todo_api` directory as a Python package.
Why:  Enables module imports like `from todo_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same layering as any of our FastAPI services:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        TodoService (Orchestration)  │  ← mutate, then persist
    ├─────────────────────────────────────┤
    │      TodoStore (In-memory + CSV)    │  ← the only mutable state
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Todo record + API envelopes
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
