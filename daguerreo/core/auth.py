"""Authentication utilities for API endpoints."""

from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from daguerreo.core.config import settings
from daguerreo.utils.helpers import logger

# HTTP Bearer token security scheme; missing headers are handled below
security = HTTPBearer(auto_error=False)

def verify_token(credentials: Optional[HTTPAuthorizationCredentials] = Security(security)) -> Optional[str]:
    """
    Verify Bearer token from request header.

    Authentication is disabled while ``API_TOKEN`` is empty.

    Args:
        credentials: HTTP authorization credentials containing the Bearer token

    Returns:
        The verified token, or None when authentication is disabled

    Raises:
        HTTPException: If token is missing or invalid
    """
    if not settings.API_TOKEN:
        logger.debug("API_TOKEN not configured in settings. Authentication is disabled.")
        return credentials.credentials if credentials else None

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials
    if token != settings.API_TOKEN:
        logger.warning(f"Invalid token attempt: {token[:10]}...")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug("Token verified successfully")
    return token
