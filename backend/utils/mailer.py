# utils/mailer.py
import logging
from typing import Optional
from urllib.parse import urljoin

import httpx

from config import settings

logger = logging.getLogger(__name__)


class MailClient:
    def __init__(self, api_key: Optional[str] = None, api_url: Optional[str] = None, sender: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.SENDGRID_API_KEY
        self.api_url = api_url or settings.SENDGRID_API_URL
        self.sender = sender or settings.MAIL_FROM

    def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> bool:
        # Without an API key we only log what would have been sent (development)
        if not self.api_key:
            logger.info("Email not sent (no SENDGRID_API_KEY): to=%s subject=%s", to, subject)
            return True

        content = [{"type": "text/html", "value": html}]
        if text:
            content.insert(0, {"type": "text/plain", "value": text})
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": content,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            response = httpx.post(urljoin(self.api_url, "/v3/mail/send"), json=payload, headers=headers, timeout=10.0)
            response.raise_for_status()
            return True
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error("SendGrid email error: %s", e)
            return False


mail_client = MailClient()


def get_mail_client() -> MailClient:
    return mail_client
