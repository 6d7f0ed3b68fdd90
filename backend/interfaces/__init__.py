from .report_router import router as report_router
from .distribution_router import router as distribution_router

__all__ = [
    "report_router",
    "distribution_router",
]
