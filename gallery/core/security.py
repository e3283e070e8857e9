"""
Security utilities for authentication and authorization
Tokens are issued by the identity provider; this module only verifies them
and answers the "is this caller an admin" question
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .config import settings
from .exceptions import UnauthorizedException, ForbiddenException

# Security scheme
security = HTTPBearer(auto_error=False)

class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
        """Create JWT access token"""
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        to_encode.update({"exp": expire, "type": "access"})
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """Decode and validate JWT token"""
        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            raise UnauthorizedException("Invalid authentication credentials")

# Dependency to get current user from token
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Dict[str, Any]:
    """Extract and validate caller identity from JWT token"""
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = SecurityUtils.decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedException("Invalid token type")

    return {
        "id": payload.get("sub"),
        "role": payload.get("role"),
        "email": payload.get("email"),
    }

# Role-based access control
def require_role(allowed_roles: list[str]):
    """Dependency factory to check caller role"""
    async def role_checker(current_user: dict = Depends(get_current_user)):
        if current_user.get("role") not in allowed_roles:
            raise ForbiddenException("Insufficient permissions")
        return current_user
    return role_checker

require_admin = require_role(["admin"])
