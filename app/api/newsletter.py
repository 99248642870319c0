"""
Newsletter API

Endpoints:
- POST /api/v1/newsletter - Subscribe from the site footer / welcome popup
- POST /api/v1/newsletter/back-in-stock - Ask to be notified about a sold-out product
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from app.core.exceptions import DuplicateEntryError
from app.core.rate_limit import newsletter_limiter, rate_limit
from app.domain.inquiry import BackInStockSubmission, NewsletterSubmission
from app.repositories.inquiry_repository import NewsletterRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/newsletter", tags=["Newsletter"])

newsletter_rate_limit = rate_limit(newsletter_limiter, "newsletter")


def get_newsletter_repository() -> NewsletterRepository:
    return NewsletterRepository()


INVALID_EMAIL = "Invalid email address"


async def parse_newsletter_submission(request: Request) -> NewsletterSubmission:
    """Any malformed signup body reads as a bad email address"""
    try:
        payload = await request.json()
        return NewsletterSubmission.model_validate(payload)
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail=INVALID_EMAIL)


@router.post("", dependencies=[Depends(newsletter_rate_limit)])
async def subscribe(
    submission: NewsletterSubmission = Depends(parse_newsletter_submission),
    repo: NewsletterRepository = Depends(get_newsletter_repository)
):
    """
    Add an email to the newsletter list.

    Returns 409 with code DUPLICATE when the address is already subscribed.
    """
    if submission.is_bot:
        logger.info("Newsletter honeypot triggered, dropping submission")
        return {"success": True}

    repo.subscribe(submission.email, source="website")
    logger.info("Newsletter subscriber added")

    return {"success": True}


@router.post("/back-in-stock", dependencies=[Depends(newsletter_rate_limit)])
async def notify_back_in_stock(
    submission: BackInStockSubmission,
    repo: NewsletterRepository = Depends(get_newsletter_repository)
):
    """
    Record a back-in-stock request as a subscriber whose source names the
    product (and variant). Signing up twice is not an error.
    """
    try:
        repo.subscribe(submission.email, source=submission.source)
    except DuplicateEntryError:
        return {"success": True, "already_subscribed": True}

    logger.info(f"Back-in-stock request for {submission.source}")
    return {"success": True, "already_subscribed": False}
