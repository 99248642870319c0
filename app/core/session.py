"""
Visitor session id for the cart, wishlist and history stores
"""
import re

from fastapi import Header, HTTPException, status

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{8,128}$")


async def require_session_id(x_session_id: str = Header(None, alias="X-Session-Id")) -> str:
    """
    Opaque id generated by the web client and sent on every store request.

    Usage:
        @router.get("/cart")
        async def get_cart(session_id: str = Depends(require_session_id)):
            pass
    """
    if not x_session_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing X-Session-Id header"
        )
    if not SESSION_ID_PATTERN.match(x_session_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Session-Id header"
        )
    return x_session_id
