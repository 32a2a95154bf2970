from .router import router
from .service import UserService

__all__ = ["UserService", "router"]
