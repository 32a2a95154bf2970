import enum
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import AuthenticationError, ForbiddenError
from .models import Role
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class Capability(str, enum.Enum):
    BOOK_OWN_APPOINTMENT = "book_own_appointment"
    CANCEL_APPOINTMENT = "cancel_appointment"
    UPDATE_APPOINTMENT_STATUS = "update_appointment_status"
    RECORD_OWN_WORK = "record_own_work"
    MANAGE_ALL_APPOINTMENTS = "manage_all_appointments"
    MANAGE_ALL_WORKS = "manage_all_works"
    MANAGE_CATALOG = "manage_catalog"
    MANAGE_USERS = "manage_users"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(
        {
            Capability.CANCEL_APPOINTMENT,
            Capability.UPDATE_APPOINTMENT_STATUS,
            Capability.MANAGE_ALL_APPOINTMENTS,
            Capability.MANAGE_ALL_WORKS,
            Capability.MANAGE_CATALOG,
            Capability.MANAGE_USERS,
        }
    ),
    Role.MANICURIST: frozenset(
        {
            Capability.CANCEL_APPOINTMENT,
            Capability.UPDATE_APPOINTMENT_STATUS,
            Capability.RECORD_OWN_WORK,
        }
    ),
    Role.CLIENT: frozenset(
        {
            Capability.BOOK_OWN_APPOINTMENT,
            Capability.CANCEL_APPOINTMENT,
        }
    ),
}


@dataclass(frozen=True)
class Actor:
    """Identity asserted by a verified access token"""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES[self.role]


def actor_from_claims(claims: dict) -> Actor:
    user_id = claims.get("user_id")
    role_id = claims.get("role_id")
    if not isinstance(user_id, int) or role_id is None:
        logger.error(f"❌ Token missing identity claims. Available claims: {list(claims.keys())}")
        raise AuthenticationError("Invalid token claims", code="INVALID_TOKEN")
    try:
        role = Role(role_id)
    except ValueError as e:
        logger.warning(f"⚠️ Token for user {user_id} carries unknown role_id={role_id}")
        raise AuthenticationError("Invalid token claims", code="INVALID_TOKEN") from e
    return Actor(user_id=user_id, role=role)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Actor:
    """Resolve the bearer token into the acting user"""
    if not credentials:
        raise AuthenticationError(
            "Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            code="NO_TOKEN",
        )

    claims = decode_access_token(credentials.credentials)
    actor = actor_from_claims(claims)
    logger.debug(f"✅ User authenticated: {actor.user_id} ({actor.role.name})")
    return actor


def require_capability(*capabilities: Capability):
    """
    Dependency factory: the actor must hold at least one of the capabilities.
    """

    async def dependency(actor: Actor = Depends(get_current_user)) -> Actor:
        if not any(actor.can(c) for c in capabilities):
            logger.warning(
                f"⚠️ User {actor.user_id} ({actor.role.name}) denied; needs one of "
                f"{[c.value for c in capabilities]}"
            )
            raise ForbiddenError(
                "You do not have permission to access this resource",
                code="INSUFFICIENT_PERMISSIONS",
            )
        return actor

    return dependency
