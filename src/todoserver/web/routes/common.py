from __future__ import annotations

from starlette.datastructures import QueryParams
from starlette.requests import Request

from todoserver.services import ResourceController


def single_valued(query_params: QueryParams) -> dict[str, str]:
    # Repeated parameters keep their first value.
    return {key: query_params.getlist(key)[0] for key in query_params.keys()}


def get_todo_controller(request: Request) -> ResourceController:
    controller: ResourceController = request.app.state.todo_controller
    return controller


def get_user_controller(request: Request) -> ResourceController:
    controller: ResourceController = request.app.state.user_controller
    return controller
