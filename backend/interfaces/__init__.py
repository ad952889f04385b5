from .revenue_router import router as revenue_router
from .health_router import router as health_router

__all__ = [
    "revenue_router",
    "health_router",
]
