from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..dependencies import get_todo_service
from ..models import TodoItem
from ..schemas import TodoDraft, ToggleRequest
from ..services import TodoService

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoItem],
    summary="List Todos",
    description="Return the whole todo list in stored order.",
)
def list_todos(service: TodoService = Depends(get_todo_service)) -> List[TodoItem]:
    """
    List all todos.
    """
    return service.list()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoItem,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(draft: TodoDraft, service: TodoService = Depends(get_todo_service)) -> TodoItem:
    """
    Create a new Todo. New items start uncompleted.
    """
    return service.create(draft)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoItem,
    summary="Replace Todo",
    description="Replace an existing Todo item with the given one.",
    responses={
        200: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
    },
)
def update_todo(todo_id: str, updated: TodoItem, service: TodoService = Depends(get_todo_service)) -> TodoItem:
    """
    Full replacement of a Todo item. The path id must match the body id.
    """
    if updated.id != todo_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Path id does not match body id")
    return service.update(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: str, service: TodoService = Depends(get_todo_service)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    service.delete(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/toggle",
    response_model=TodoItem,
    summary="Toggle Todo",
    description="Mark a Todo item completed or not completed.",
    responses={
        200: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
    },
)
def toggle_todo(
    todo_id: str, payload: ToggleRequest, service: TodoService = Depends(get_todo_service)
) -> TodoItem:
    """
    Set the completion flag; completedAt follows it.
    """
    return service.toggle_complete(todo_id, payload.completed)
