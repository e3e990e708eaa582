"""
Todo REST Backend — Pydantic Response Schemas
===============================================

What:  Envelope models wrapping every JSON response of the API.
Why:   FastAPI validates and serializes responses through these and
       documents them in the OpenAPI schema.

Response shapes:
    Single record:  {"meta": null, "data": {...todo...}}
    Collection:     {"data": [{...}, {...}]}
    Error:          {"error": {"status": 404, "title": "Record Not Found"}}
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from todo_api.models.todo import Todo


# ══════════════════════════════════════════════════════════════════════════
# Success Envelopes
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """
    What:  A single todo.
    Who:   Returned by GET/PUT /todos/{id} and POST /todos.

    `meta` is reserved for response metadata and is always null today.
    """
    meta: Optional[Any] = Field(default=None, description="Reserved response metadata")
    data: Todo = Field(description="The todo record")


class TodoListResponse(BaseModel):
    """
    What:  Every todo, sorted ascending by numeric ID.
    Who:   Returned by GET /todos.
    """
    data: List[Todo] = Field(description="All todos, ordered by numeric ID")


# ══════════════════════════════════════════════════════════════════════════
# Error Envelope
# ══════════════════════════════════════════════════════════════════════════


class ApiError(BaseModel):
    status: int = Field(description="HTTP status code")
    title: str = Field(description="Short human-readable error title")


class ErrorResponse(BaseModel):
    """Error format shared by every endpoint."""
    error: ApiError


class HealthResponse(BaseModel):
    """
    What:  Liveness report for monitoring and container health checks.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    todo_count: int = Field(description="Number of todos currently stored")
    file_persistence: bool = Field(description="Whether mutations are mirrored to the data file")
    uptime_seconds: float = Field(description="Seconds since service started")
