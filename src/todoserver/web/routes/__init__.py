from __future__ import annotations

from fastapi import APIRouter

from todoserver.web.routes.health import router as health_router
from todoserver.web.routes.todos import router as todos_router
from todoserver.web.routes.users import router as users_router

router = APIRouter()
router.include_router(health_router)
router.include_router(todos_router)
router.include_router(users_router)
