# API endpoints and routers

from .reader_endpoints import router as reader_router
from .phrase_endpoints import router as phrase_router

__all__ = [
    "reader_router",
    "phrase_router",
]
