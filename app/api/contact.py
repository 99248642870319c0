"""
Contact form API

Endpoint:
- POST /api/v1/contact - Store a contact inquiry
"""
import logging

from fastapi import APIRouter, Depends

from app.core.rate_limit import contact_limiter, rate_limit
from app.domain.inquiry import ContactSubmission
from app.repositories.inquiry_repository import ContactRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/contact", tags=["Contact"])


def get_contact_repository() -> ContactRepository:
    return ContactRepository()


@router.post(
    "",
    dependencies=[Depends(rate_limit(contact_limiter, "contact"))]
)
async def submit_contact(
    submission: ContactSubmission,
    repo: ContactRepository = Depends(get_contact_repository)
):
    """
    Store a message from the contact page.

    Rate limited to 2 requests per 2 minutes per IP. Bot submissions
    (filled honeypot) get the same success response and are dropped.
    """
    if submission.is_bot:
        logger.info("Contact honeypot triggered, dropping submission")
        return {"success": True}

    repo.create(submission.to_row())
    logger.info("Contact inquiry stored")

    return {"success": True}
