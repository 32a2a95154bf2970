from .router import router
from .service import WorkService

__all__ = ["WorkService", "router"]
