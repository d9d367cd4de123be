from cardbinder.api.cards import router as cards_router
from cardbinder.api.dashboard import router as dashboard_router
from cardbinder.api.filters import router as filters_router
from cardbinder.api.health import router as health_router

__all__ = [
    "cards_router",
    "dashboard_router",
    "filters_router",
    "health_router",
]
