"""
Bearer token handling for reviewer identity.

Tokens are issued by the authentication service; this module only verifies
them. Review endpoints accept an optional token: when one is supplied it
must be valid, and its ``id`` claim identifies the reviewer.
"""
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from petcare.core.config import settings
from petcare.core.exceptions import InvalidTokenError
from petcare.log.logging import logger

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)


def verify_jwt_token(token: str) -> dict:
    """
    Verify JWT token.

    Args:
        token: Token to verify

    Returns:
        Decoded token data
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])


async def get_optional_reviewer(token: str | None = Depends(oauth2_scheme)) -> str | None:
    """
    Resolve the reviewer behind the request, if any.

    Returns:
        The reviewer's user ID, or None when no bearer token was sent.

    Raises:
        InvalidTokenError: If a token was sent but cannot be verified.
    """
    if not token:
        return None

    try:
        payload = verify_jwt_token(token)
    except JWTError as e:
        logger.warning("Reviewer token rejected: {error}", error=str(e), event_type="auth_failed")
        raise InvalidTokenError()

    reviewer_id = payload.get("id") or payload.get("sub")
    if reviewer_id is None:
        logger.warning("Reviewer token has no identity claim", event_type="auth_failed")
        raise InvalidTokenError()

    return str(reviewer_id)
