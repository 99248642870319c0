"""
Pre-order API (storefront)

Endpoints:
- POST /api/v1/preorders - Submit a pre-order for a sold-out variant
- POST /api/v1/preorders/confirmation - Send (or re-send) the confirmation email
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.exceptions import StorefrontError
from app.core.rate_limit import preorder_limiter, rate_limit
from app.domain.preorder import PreOrderConfirmation, PreOrderCreate
from app.services.email_service import EmailService, get_email_service
from app.services.preorder_service import PreOrderService, get_preorder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/preorders", tags=["Pre-Orders"])


@router.post(
    "",
    status_code=201,
    dependencies=[Depends(rate_limit(preorder_limiter, "preorder"))]
)
async def submit_preorder(
    request: PreOrderCreate,
    service: PreOrderService = Depends(get_preorder_service)
):
    """
    Record a pre-order and email a confirmation to the customer.

    The response reports email_sent=false when the email could not be
    delivered; the pre-order is kept either way.
    """
    try:
        return await service.submit(request)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Pre-order error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to submit pre-order. Please try again.")


@router.post("/confirmation")
async def send_confirmation(
    confirmation: PreOrderConfirmation,
    email_service: EmailService = Depends(get_email_service)
):
    """Send the pre-order confirmation email only"""
    try:
        data = await email_service.send_preorder_confirmation(confirmation)
    except StorefrontError as e:
        logger.error(f"Error sending pre-order confirmation email: {e.message}")
        raise HTTPException(status_code=500, detail="Failed to send confirmation email")

    return {"success": True, "data": data}
