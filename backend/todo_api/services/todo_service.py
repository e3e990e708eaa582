"""
Todo REST Backend — Todo Service (Business Logic Orchestrator)
================================================================

What:  Coordinates every handler's "change the store, then persist" workflow.
Why:   Keeps route handlers HTTP-only and gives the not-found / failed-update
       rules a single home that can be tested without a client.
How:   Wraps a TodoStore; converts its None/False signals into
       NotFoundError / ValidationError and calls save_to_file() after each
       successful mutation.
Who:   Built by create_app() and injected into routes via get_todo_service().

Persistence ordering:
    The data file is rewritten before the handler returns, so a client that
    received 201/200 knows the change is on disk (when persistence is on).
    If the write fails, the in-memory change stays and PersistenceError
    propagates to the global handler (→ 500).
"""

import logging
from typing import List

from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.models.todo import Todo
from todo_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


class TodoService:
    """
    Business logic layer for todo operations.

    Responsibilities:
        - list_todos(): all todos sorted by numeric ID
        - get_todo() / ensure_exists(): lookup with not-found handling
        - create_todo() / update_todo() / delete_todo() / delete_all_todos():
          mutate, then persist
    """

    def __init__(self, store: TodoStore):
        self.store = store

    def list_todos(self) -> List[Todo]:
        """
        Returns every todo sorted ascending by numeric ID.

        Why numeric: string order would put "10" before "2".
        """
        return sorted(self.store.list(), key=lambda todo: int(todo.id))

    def get_todo(self, todo_id: str) -> Todo:
        """
        Raises:
            NotFoundError: no todo has this ID (→ 404)
        """
        todo = self.store.get(todo_id)
        if todo is None:
            raise NotFoundError(todo_id=todo_id)
        return todo

    def ensure_exists(self, todo_id: str) -> None:
        """Raises NotFoundError unless a todo has this ID."""
        self.get_todo(todo_id)

    async def create_todo(self, todo: Todo) -> Todo:
        created = self.store.add(todo)
        logger.info("Todo %s created", created.id)
        await self.store.save_to_file()
        return created

    async def update_todo(self, todo_id: str, todo: Todo) -> Todo:
        """
        Replaces the todo at `todo_id`.

        Raises:
            ValidationError: the record disappeared between the route's
                existence check and this write (→ 400 "Update data model failed")
        """
        updated = self.store.update(todo_id, todo)
        if updated is None:
            logger.warning("Update of todo %s failed: record no longer exists", todo_id)
            raise ValidationError(
                title="Update data model failed",
                context={"todo_id": todo_id},
            )
        logger.info("Todo %s updated", todo_id)
        await self.store.save_to_file()
        return updated

    async def delete_todo(self, todo_id: str) -> None:
        """
        Removes the todo and renumbers the remaining ones.

        Raises:
            NotFoundError: no todo has this ID (→ 404)
        """
        if not self.store.remove(todo_id):
            raise NotFoundError(todo_id=todo_id)
        logger.info("Todo %s deleted; %d remaining", todo_id, len(self.store))
        await self.store.save_to_file()

    async def delete_all_todos(self) -> None:
        self.store.clear()
        logger.info("All todos deleted")
        await self.store.save_to_file()
