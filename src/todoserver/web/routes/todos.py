from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from todoserver.schemas import CreatedResponse, TodoDocument
from todoserver.services import ResourceController
from todoserver.web.routes.common import get_todo_controller, single_valued

router = APIRouter(prefix="/api/todos", tags=["todos"])


@router.get("", response_model=list[TodoDocument])
async def list_todos(
    request: Request,
    controller: ResourceController = Depends(get_todo_controller),
) -> Any:
    return await controller.list(single_valued(request.query_params))


@router.get("/{todo_id}", response_model=TodoDocument)
async def get_todo(
    todo_id: str,
    controller: ResourceController = Depends(get_todo_controller),
) -> Any:
    return await controller.get(todo_id)


@router.post("", response_model=CreatedResponse)
async def add_todo(
    payload: Any = Body(...),
    controller: ResourceController = Depends(get_todo_controller),
) -> CreatedResponse:
    return CreatedResponse(id=await controller.create(payload))


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(
    todo_id: str,
    controller: ResourceController = Depends(get_todo_controller),
) -> Response:
    await controller.delete(todo_id)
    return Response(status_code=204)
