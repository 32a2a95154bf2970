from .router import router
from .service import AppointmentService, WalkinDetails

__all__ = ["AppointmentService", "WalkinDetails", "router"]
