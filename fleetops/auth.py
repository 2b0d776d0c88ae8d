import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fleetops.config import settings
from fleetops.exceptions import UnauthorizedError

logger = structlog.get_logger()

# The same bearer token is forwarded to the backend record API
bearer_scheme = HTTPBearer()


async def verify_operator_token(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),  # noqa: B008
) -> dict:
    """Decode the operator's token and return its claims; a subject is mandatory."""
    try:
        return jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=["HS256"],
            options={"require": ["sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError as exc:
        logger.info("operator_token_rejected", reason=str(exc))
        raise UnauthorizedError("Invalid token") from None
