from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from marketplace.core.config import settings
import structlog

logger = structlog.get_logger()

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.error("JWT validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("userId")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing userId",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"user_id": str(user_id), "payload": payload}


def validate_request(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    token = credentials.credentials
    return verify_token(token)


def validate_catalog_read(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[dict]:
    """Read access for products and catalog lookups.

    Anonymous callers pass when ``public_catalog_reads`` is on. A token that is
    sent is always verified, so a bad token is rejected even on a public read.
    """
    if credentials is None:
        if settings.public_catalog_reads:
            return None
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return verify_token(credentials.credentials)
