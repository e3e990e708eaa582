"""
Todo REST Backend — Store Wiring and FastAPI Dependencies
===========================================================

What:  Builds the per-application TodoStore/TodoService and hands the
       service to route handlers.
Why:   The store is an explicit object owned by the app (app.state), not a
       module global. Tests build a fresh app, and therefore a fresh store,
       for every case.
How:   create_app() calls build_todo_service(); routes declare
       `service: TodoService = Depends(get_todo_service)`.
"""

from typing import Optional

from fastapi import Request

from todo_api.config import Settings, settings
from todo_api.services.todo_service import TodoService
from todo_api.services.todo_store import TodoStore


def build_todo_service(
    store: Optional[TodoStore] = None,
    config: Optional[Settings] = None,
) -> TodoService:
    """
    Args:
        store: Use this store instead of building one (used in tests)
        config: Settings to read persistence options from (default: global settings)
    """
    if store is None:
        config = config or settings
        store = TodoStore(
            data_file=config.data_file,
            file_persistence=config.file_persistence,
        )
    return TodoService(store)


def get_todo_service(request: Request) -> TodoService:
    """
    FastAPI dependency returning the application's TodoService.

    Example usage in a route:
        @router.get("/todos")
        async def list_todos(service: TodoService = Depends(get_todo_service)):
            return TodoListResponse(data=service.list_todos())
    """
    return request.app.state.todo_service
