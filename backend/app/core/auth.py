"""
Authentication middleware for Kisan Marketplace Backend
Issues and validates HS256 JWT access tokens and provides user context
"""
from typing import Optional
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel

from app.core.config import settings


# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

ROLE_PURCHASER = "user"
ROLE_VENDOR = "vendor"
ROLE_ADMIN = "admin"


class TokenUser(BaseModel):
    """User data extracted from JWT token"""
    id: str
    email: str
    name: Optional[str] = None
    role: str = ROLE_PURCHASER


class AuthConfig:
    """Authentication configuration"""

    @staticmethod
    def get_auth_secret() -> str:
        """Get the AUTH_SECRET from settings"""
        secret = settings.AUTH_SECRET
        if not secret:
            raise ValueError("AUTH_SECRET environment variable is not set")
        return secret

    @staticmethod
    def get_jwt_algorithm() -> str:
        return "HS256"


def create_access_token(user: TokenUser, expires_minutes: Optional[int] = None) -> str:
    """
    Sign a token for an authenticated purchaser, vendor or admin

    Payload:
    {
        "sub": "user_id",
        "id": "user_id",
        "email": "vendor@example.com",
        "name": "Ravi",
        "role": "vendor",
        "iat": 1234567890,
        "exp": 1234567890
    }
    """
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": user.id,
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(payload, AuthConfig.get_auth_secret(), algorithm=AuthConfig.get_jwt_algorithm())


def decode_access_token(token: str) -> dict:
    """Decode and validate an access token"""
    try:
        return jwt.decode(
            token,
            AuthConfig.get_auth_secret(),
            algorithms=[AuthConfig.get_jwt_algorithm()],
            options={"verify_aud": False}
        )
    except JWTError as e:
        error_msg = str(e).lower()
        if "expired" in error_msg:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired",
                headers={"WWW-Authenticate": "Bearer"}
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"}
        )


def _user_from_payload(payload: dict) -> Optional[TokenUser]:
    user_id = payload.get("id") or payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None
    return TokenUser(
        id=str(user_id),
        email=email,
        name=payload.get("name"),
        role=payload.get("role", ROLE_PURCHASER)
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenUser:
    """
    Dependency that extracts and validates the current user from JWT.

    Usage:
        @router.get("/protected")
        async def protected_route(user: TokenUser = Depends(get_current_user)):
            return {"message": f"Hello {user.email}"}
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )

    user = _user_from_payload(decode_access_token(credentials.credentials))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload: missing user id or email",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[TokenUser]:
    """Optional authentication - returns None if no valid token provided."""
    if not credentials:
        return None

    try:
        return _user_from_payload(decode_access_token(credentials.credentials))
    except HTTPException:
        return None


def require_role(required_role: str):
    """
    Dependency factory for role-based access control.

    Roles are not hierarchical: a vendor token cannot act as a purchaser.

    Usage:
        @router.patch("/orders/{order_id}/status")
        async def update_status(
            order_id: str,
            user: TokenUser = Depends(require_role("vendor"))
        ):
            pass
    """
    async def role_checker(
        user: TokenUser = Depends(get_current_user)
    ) -> TokenUser:
        if user.role != required_role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {required_role}, your role: {user.role}"
            )
        return user

    return role_checker


# Convenience dependencies for common role requirements
require_admin = require_role(ROLE_ADMIN)
require_vendor = require_role(ROLE_VENDOR)
require_purchaser = require_role(ROLE_PURCHASER)
