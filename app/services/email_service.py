"""
Email service

Sends transactional email through the Resend HTTP API. Only the
pre-order confirmation is sent from the backend today.
"""
import html
import logging
from datetime import datetime
from typing import Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import ConfigurationError, UpstreamServiceError
from app.domain.preorder import PreOrderConfirmation

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
PREORDER_SUBJECT = "Pre-Order Confirmation - Aspire Manifest"


def render_preorder_confirmation(confirmation: PreOrderConfirmation, year: Optional[int] = None) -> str:
    """Build the confirmation HTML; every customer-supplied value is escaped"""
    year = year or datetime.now().year
    customer_name = html.escape(confirmation.name or "Valued Customer")
    product_title = html.escape(confirmation.product_title)
    variant_title = html.escape(confirmation.variant_title)
    price = html.escape(confirmation.price)
    support = html.escape(settings.SUPPORT_EMAIL)

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="margin: 0; padding: 0; background-color: #f5f5f5; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f5f5f5; padding: 40px 20px;">
    <tr>
      <td align="center">
        <table width="100%" cellpadding="0" cellspacing="0" style="max-width: 600px; background-color: #ffffff; border-radius: 8px;">
          <tr>
            <td style="background-color: #000000; padding: 30px 40px; text-align: center;">
              <h1 style="margin: 0; color: #ffffff; font-size: 24px; letter-spacing: 2px;">ASPIRE MANIFEST</h1>
            </td>
          </tr>
          <tr>
            <td style="padding: 40px;">
              <h2 style="margin: 0 0 20px; color: #000000; font-size: 20px;">Pre-Order Confirmed!</h2>
              <p style="margin: 0 0 20px; color: #333333; font-size: 16px;">Hi {customer_name},</p>
              <p style="margin: 0 0 30px; color: #333333; font-size: 16px;">
                Thank you for your pre-order! We've reserved the following item for you and will notify you as soon as it's back in stock.
              </p>
              <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f9f9f9; border-radius: 8px; margin-bottom: 30px;">
                <tr>
                  <td style="padding: 20px;">
                    <p style="margin: 0 0 8px; color: #000000; font-size: 16px; font-weight: 600;">{product_title}</p>
                    <p style="margin: 0 0 8px; color: #666666; font-size: 14px;">{variant_title}</p>
                    <p style="margin: 0; color: #666666; font-size: 14px;">Quantity: {confirmation.quantity} &bull; {price}</p>
                  </td>
                </tr>
              </table>
              <p style="margin: 0 0 10px; color: #666666; font-size: 14px;"><strong>What happens next?</strong></p>
              <ul style="margin: 0 0 30px; padding-left: 20px; color: #666666; font-size: 14px;">
                <li>We'll email you when the item is available</li>
                <li>You'll have priority access to purchase</li>
                <li>Final price may vary at time of purchase</li>
              </ul>
              <p style="margin: 0; color: #666666; font-size: 14px;">
                Questions? Reply to this email or contact us at <a href="mailto:{support}" style="color: #000000;">{support}</a>
              </p>
            </td>
          </tr>
          <tr>
            <td style="background-color: #f9f9f9; padding: 30px 40px; text-align: center; border-top: 1px solid #eeeeee;">
              <p style="margin: 0; color: #999999; font-size: 12px;">&copy; {year} Aspire Manifest. All rights reserved.</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


class EmailService:
    """Thin Resend client"""

    def __init__(self, api_key: Optional[str] = None, sender: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.sender = sender or settings.EMAIL_FROM

    async def send(self, to: List[str], subject: str, html_body: str) -> Dict:
        """
        Send one email

        Returns:
            Resend response body ({"id": ...})

        Raises:
            ConfigurationError: RESEND_API_KEY is not set
            UpstreamServiceError: Resend rejected the request
        """
        if not self.api_key:
            raise ConfigurationError("RESEND_API_KEY is not configured")

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    RESEND_API_URL,
                    json={
                        "from": self.sender,
                        "to": to,
                        "subject": subject,
                        "html": html_body,
                    },
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=15.0
                )
            except httpx.HTTPError as e:
                logger.error(f"Resend request failed: {e}")
                raise UpstreamServiceError("Failed to send email") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"body": data}

        if response.status_code >= 400:
            logger.error(f"Resend error {response.status_code}: {data}")
            raise UpstreamServiceError(data.get("message") or "Failed to send email")

        return data

    async def send_preorder_confirmation(self, confirmation: PreOrderConfirmation) -> Dict:
        data = await self.send(
            to=[confirmation.email],
            subject=PREORDER_SUBJECT,
            html_body=render_preorder_confirmation(confirmation)
        )
        logger.info(f"Pre-order confirmation sent: {data.get('id')}")
        return data


def get_email_service() -> EmailService:
    return EmailService()
