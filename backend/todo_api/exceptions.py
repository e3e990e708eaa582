"""
Todo REST Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise meaningful exceptions; global handlers (registered in
       main.py) turn them into the `{"error": {"status", "title"}}` body.
How:   Each exception carries the HTTP status, a client-facing title and an
       optional context dict that is logged but never returned.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    TodoApiError (base)          → 500
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    └── PersistenceError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TodoApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        status:   HTTP status code the global handler responds with
        title:    Client-facing error title (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status: int = 500

    def __init__(
        self,
        title: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.title = title
        self.context = context or {}
        super().__init__(self.title)


class ValidationError(TodoApiError):
    """
    Raised when a request body cannot be decoded into a Todo, or an
    update could not be applied to the store.

    HTTP: 400 Bad Request

    Example response:
        {"error": {"status": 400, "title": "Invalid Body"}}
    """

    status = 400

    def __init__(
        self,
        title: str = "Invalid Body",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(title=title, context=context)


class NotFoundError(TodoApiError):
    """
    Raised when no todo exists under the requested ID.

    HTTP: 404 Not Found

    The store signals absence with None/False rather than raising;
    TodoService converts that into this exception so routes never have to
    check return values.
    """

    status = 404

    def __init__(
        self,
        todo_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if todo_id is not None:
            ctx["todo_id"] = todo_id
        super().__init__(title="Record Not Found", context=ctx)
        self.todo_id = todo_id


class PersistenceError(TodoApiError):
    """
    Raised when the CSV data file cannot be read, parsed or written.

    HTTP: 500 Internal Server Error

    At startup this aborts the application (a corrupt data file must not be
    silently overwritten by the next save). During a request the in-memory
    change has already happened; the handler logs at CRITICAL and answers 500.
    """

    status = 500

    def __init__(
        self,
        message: str = "Data file operation failed",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(title="Internal Server Error", context=ctx)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message}: {self.path}"
        return self.message
