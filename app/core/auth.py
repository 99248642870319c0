"""
Authentication for the admin endpoints
Validates Supabase access tokens and checks the admin role in user_roles
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from app.core.config import settings
from app.repositories.role_repository import RoleRepository

logger = logging.getLogger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

SUPABASE_AUDIENCE = "authenticated"
JWT_ALGORITHM = "HS256"


class TokenUser(BaseModel):
    """User data extracted from a Supabase JWT"""
    id: str
    email: Optional[str] = None
    role: str = "authenticated"


def decode_supabase_token(token: str) -> dict:
    """
    Decode and validate a Supabase access token.

    Supabase signs session tokens with the project JWT secret (HS256):
    {
        "sub": "user uuid",
        "email": "staff@aspiremanifest.com",
        "role": "authenticated",
        "aud": "authenticated",
        "exp": 1234567890
    }
    """
    secret = settings.SUPABASE_JWT_SECRET
    if not secret:
        logger.error("SUPABASE_JWT_SECRET is not set, rejecting admin request")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication is not configured"
        )

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            audience=SUPABASE_AUDIENCE
        )
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"}
        )
    except JWTError as e:
        logger.warning(f"Invalid admin token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"}
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenUser:
    """
    Dependency that extracts and validates the current user from the JWT.

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

    payload = decode_supabase_token(credentials.credentials)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload: missing user id",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return TokenUser(
        id=user_id,
        email=payload.get("email"),
        role=payload.get("role", "authenticated")
    )


def get_role_repository() -> RoleRepository:
    return RoleRepository()


def require_role(required_role: str):
    """
    Dependency factory for role-based access control backed by user_roles.

    Usage:
        @router.get("/preorders")
        async def list_preorders(user: TokenUser = Depends(require_role("admin"))):
            pass
    """
    async def role_checker(
        user: TokenUser = Depends(get_current_user),
        roles: RoleRepository = Depends(get_role_repository)
    ) -> TokenUser:
        if not roles.has_role(user.id, required_role):
            logger.warning(f"User {user.id} denied, missing role {required_role}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {required_role}"
            )
        return user

    return role_checker


# Convenience dependency for the admin dashboard
require_admin = require_role("admin")
