"""
Todo REST Backend — Todo Route Handlers
=========================================

What:  CRUD and bulk-delete endpoints for todos.
How:   Each handler extracts the path ID / body, delegates to TodoService and
       wraps the result in a response envelope. Errors are raised as
       application exceptions and formatted by the global handlers.

Endpoints:
    GET    /todos          → 200 {"data": [...]}  (sorted by numeric ID)
    GET    /todos/{id}     → 200 {"meta": null, "data": {...}} | 404
    POST   /todos          → 201 {"meta": null, "data": {...}} | 400
    PUT    /todos/{id}     → 200 {"meta": null, "data": {...}} | 404 | 400
    DELETE /todos/{id}     → 200 (empty body) | 404
    DELETE /todos          → 200 (empty body)

Why bodies are decoded by hand:
    A FastAPI body parameter is validated before the handler runs, which
    would answer PUT with 400 for an unknown ID. The existence check must win,
    so the raw body is decoded after it.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError as PydanticValidationError

from todo_api.dependencies import get_todo_service
from todo_api.exceptions import ValidationError
from todo_api.models.todo import Todo
from todo_api.schemas.todo import ErrorResponse, TodoListResponse, TodoResponse
from todo_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Todos"])

# OpenAPI request body for the hand-decoded POST/PUT endpoints
_TODO_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": Todo.model_json_schema()}},
    }
}


async def decode_todo(request: Request) -> Todo:
    """
    Decodes the JSON request body into a Todo.

    Raises:
        ValidationError: empty body, invalid JSON, or a field of the wrong type
    """
    body = await request.body()
    if not body.strip():
        raise ValidationError(context={"reason": "empty body"})
    try:
        return Todo.model_validate_json(body)
    except PydanticValidationError as e:
        raise ValidationError(context={"reason": str(e)})


@router.get(
    "/todos",
    response_model=TodoListResponse,
    summary="List all todos",
    description="Returns every todo sorted ascending by numeric ID.",
)
async def list_todos(
    service: TodoService = Depends(get_todo_service),
) -> TodoListResponse:
    return TodoListResponse(data=service.list_todos())


@router.get(
    "/todos/{todo_id}",
    response_model=TodoResponse,
    responses={404: {"description": "Todo not found", "model": ErrorResponse}},
    summary="Get a single todo by ID",
)
async def get_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    return TodoResponse(data=service.get_todo(todo_id))


@router.post(
    "/todos",
    status_code=201,
    response_model=TodoResponse,
    responses={400: {"description": "Body is not a valid todo", "model": ErrorResponse}},
    summary="Create a todo",
    description="Stores the todo under the next sequential ID. Any id in the body is ignored.",
    openapi_extra=_TODO_BODY,
)
async def create_todo(
    request: Request,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    todo = await decode_todo(request)
    created = await service.create_todo(todo)
    return TodoResponse(data=created)


@router.put(
    "/todos/{todo_id}",
    response_model=TodoResponse,
    responses={
        400: {"description": "Body is not a valid todo, or the update failed", "model": ErrorResponse},
        404: {"description": "Todo not found", "model": ErrorResponse},
    },
    summary="Replace a todo",
    description="Overwrites the todo at the given ID. The stored id is always the path ID.",
    openapi_extra=_TODO_BODY,
)
async def update_todo(
    todo_id: str,
    request: Request,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    service.ensure_exists(todo_id)
    todo = await decode_todo(request)
    updated = await service.update_todo(todo_id, todo)
    return TodoResponse(data=updated)


@router.delete(
    "/todos/{todo_id}",
    responses={404: {"description": "Todo not found", "model": ErrorResponse}},
    summary="Delete a todo",
    description=(
        "Removes the todo and renumbers the remaining ones contiguously from 0, "
        "keeping their order. IDs held by clients are stale afterwards."
    ),
)
async def delete_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> Response:
    await service.delete_todo(todo_id)
    return Response(status_code=200)


@router.delete(
    "/todos",
    summary="Delete all todos",
)
async def delete_all_todos(
    service: TodoService = Depends(get_todo_service),
) -> Response:
    await service.delete_all_todos()
    return Response(status_code=200)
