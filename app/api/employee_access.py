"""
Employee Access API
Password gate for the employee-only storefront preview

Endpoints:
- POST /api/v1/employee-access?action=login  - Exchange the shared password for a token
- POST /api/v1/employee-access?action=verify - Check a stored token
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, Field, ValidationError

from app.core.rate_limit import employee_login_limiter, get_client_ip
from app.services.employee_access_service import EmployeeAccessService, get_employee_access_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/employee-access", tags=["Employee Access"])


class LoginRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=100)


class VerifyRequest(BaseModel):
    token: str = Field(..., min_length=1)


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        return None


async def _login(request: Request, service: EmployeeAccessService) -> dict:
    client_ip = get_client_ip(request)
    is_allowed, remaining, retry_after = employee_login_limiter.is_allowed(f"employee-login:{client_ip}")
    if not is_allowed:
        logger.warning(f"Employee login rate limit hit from {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
            headers={
                "X-RateLimit-Limit": str(employee_login_limiter.max_requests),
                "X-RateLimit-Remaining": "0",
                "Retry-After": str(retry_after),
            }
        )

    try:
        body = LoginRequest.model_validate(await _read_json(request))
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid input")

    if not service.check_password(body.password):
        logger.warning(f"Incorrect employee password from {client_ip}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")

    logger.info(f"Employee access granted to {client_ip}")
    return {"success": True, "token": service.issue_token()}


async def _verify(request: Request, service: EmployeeAccessService) -> dict:
    try:
        body = VerifyRequest.model_validate(await _read_json(request))
    except ValidationError:
        return {"valid": False}

    return {"valid": service.verify_token(body.token)}


@router.post("")
async def employee_access(
    request: Request,
    action: Optional[str] = Query(None, description="login or verify"),
    service: EmployeeAccessService = Depends(get_employee_access_service)
):
    """
    Login is rate limited to 5 attempts per 15 minutes per IP.
    Verify always answers 200 with {"valid": bool}.
    """
    if action == "login":
        return await _login(request, service)
    if action == "verify":
        return await _verify(request, service)

    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
