from typing import Optional

from fastapi import Depends, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import InvalidTokenException, TokenExpiredException
from app.core.log_config import logger
from app.core.security import create_access_token, verify_token
from app.schemas.auth import CallerIdentity

security = HTTPBearer(auto_error=False)

RENEWED_TOKEN_HEADER = "Authorization"


async def get_current_identity(
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CallerIdentity:
    """
    Dependency guarding authenticated routes.

    Verifies the Bearer token, then issues a fresh token for the same
    identity and sets it on the response, so every authenticated call slides
    the session's expiry forward. There is no revocation: a token stays valid
    until its own expiry.
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenException(detail="Token not provided")

    try:
        identity = verify_token(credentials.credentials)
    except (InvalidTokenException, TokenExpiredException) as e:
        logger.warning(f"Rejected request with unusable token: {e.detail}")
        raise

    response.headers[RENEWED_TOKEN_HEADER] = f"Bearer {create_access_token(identity)}"
    return identity
