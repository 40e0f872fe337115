# backend/app/api/routes/__init__.py

from .base import router as base_router
from .challenges import router as challenges_router
from .events import router as events_router
from .health import router as health_router
from .maintenance import router as maintenance_router
from .stats import router as stats_router
from .tips import router as tips_router
from .user_challenges import router as user_challenges_router
from .users import router as users_router

routers = [
    base_router,
    health_router,
    challenges_router,
    user_challenges_router,
    tips_router,
    events_router,
    users_router,
    stats_router,
    maintenance_router,
]
