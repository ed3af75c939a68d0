from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from todoserver.schemas import CreatedResponse, UserDocument
from todoserver.services import ResourceController
from todoserver.web.routes.common import get_user_controller, single_valued

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserDocument])
async def list_users(
    request: Request,
    controller: ResourceController = Depends(get_user_controller),
) -> Any:
    return await controller.list(single_valued(request.query_params))


@router.get("/{user_id}", response_model=UserDocument)
async def get_user(
    user_id: str,
    controller: ResourceController = Depends(get_user_controller),
) -> Any:
    return await controller.get(user_id)


@router.post("", response_model=CreatedResponse)
async def add_user(
    payload: Any = Body(...),
    controller: ResourceController = Depends(get_user_controller),
) -> CreatedResponse:
    return CreatedResponse(id=await controller.create(payload))


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    controller: ResourceController = Depends(get_user_controller),
) -> Response:
    await controller.delete(user_id)
    return Response(status_code=204)
