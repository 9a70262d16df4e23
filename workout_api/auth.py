"""
Caller identity for secured endpoints.

Tokens are verified by the gateway in front of this service, which forwards
the authenticated user id in a trusted header (``USER_ID_HEADER``).
"""
import logging
import uuid

from fastapi import Request

from workout_api.config import get_settings
from workout_api.errors import AuthorizationError

logger = logging.getLogger(__name__)


async def get_current_user_id(request: Request) -> uuid.UUID:
    """
    Return the authenticated caller's id.

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: uuid.UUID = Depends(get_current_user_id)):
            return {"user_id": str(user_id)}
    """
    header = get_settings().user_id_header
    raw = request.headers.get(header)

    if not raw or not raw.strip():
        raise AuthorizationError(f"Missing authentication. Provide the {header} header.")

    try:
        return uuid.UUID(raw.strip())
    except ValueError as exc:
        logger.warning("Rejected malformed %s header", header)
        raise AuthorizationError(f"{header} must be a valid UUID") from exc
