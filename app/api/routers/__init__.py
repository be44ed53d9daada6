"""
app/api/routers package marker.
"""

from app.api.routers.company_router import router as company_router
from app.api.routers.metrics_router import router as metrics_router
from app.api.routers.preferences_router import router as preferences_router
from app.api.routers.records_router import router as records_router

__all__ = [
    "company_router",
    "metrics_router",
    "preferences_router",
    "records_router",
]
