# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .users import router as users_router
from .teams import router as teams_router
from .tasks import router as tasks_router
from .files import router as files_router
from .chat import router as chat_router
from .meetings import router as meetings_router
from .health import router as health_router


api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(teams_router)
api_router.include_router(tasks_router)
api_router.include_router(files_router)
api_router.include_router(chat_router)
api_router.include_router(meetings_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
