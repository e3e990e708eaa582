# Services package init
"""
Todo REST Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the store.
How:   Services are built once per application in create_app() and handed
       to routes through FastAPI dependency injection.

Service Inventory:
    - TodoStore: in-memory todo map with optional CSV mirror
    - TodoService: mutate-then-persist orchestration used by the routes
"""

from todo_api.services.todo_service import TodoService
from todo_api.services.todo_store import TodoStore

__all__ = ["TodoService", "TodoStore"]
