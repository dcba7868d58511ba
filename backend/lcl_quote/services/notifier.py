"""
Lead notifications.

Each submission produces two emails: a confirmation to the submitter (with
the indicative price when there is one) and an alert to the operations
mailbox.
"""

import logging
from typing import Protocol

import httpx

from lcl_quote.calculator.quote import QuoteResult
from lcl_quote.i18n import Locale
from lcl_quote.services.email_templates import EmailMessage, render_customer_email, render_internal_email
from lcl_quote.submission.errors import NotificationError
from lcl_quote.submission.models import QuoteSubmission

logger = logging.getLogger("lcl.notifier")


class Notifier(Protocol):
    async def notify(
        self,
        submission: QuoteSubmission,
        quote: QuoteResult | None,
        locale: Locale,
    ) -> None: ...


class ResendNotifier:
    """Sends both emails through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://api.resend.com/emails",
        customer_from: str,
        internal_from: str,
        operations_mailbox: str,
        currency: str = "USD",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.customer_from = customer_from
        self.internal_from = internal_from
        self.operations_mailbox = operations_mailbox
        self.currency = currency
        self.timeout = timeout
        self.transport = transport

    async def _send(self, client: httpx.AsyncClient, sender: str, to: str, message: EmailMessage) -> None:
        response = await client.post(
            self.api_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"from": sender, "to": [to], "subject": message.subject, "html": message.html},
        )
        response.raise_for_status()

    async def notify(
        self,
        submission: QuoteSubmission,
        quote: QuoteResult | None,
        locale: Locale,
    ) -> None:
        customer = render_customer_email(submission, quote, locale, self.currency)
        internal = render_internal_email(submission, quote, self.currency)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                await self._send(client, self.customer_from, submission.email, customer)
                await self._send(client, self.internal_from, self.operations_mailbox, internal)
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to send quote emails: {e}") from e

        logger.info("Quote emails sent to %s and %s", submission.email, self.operations_mailbox)


class LoggingNotifier:
    """Stand-in used when no email API key is configured: renders and logs only."""

    def __init__(self, operations_mailbox: str, currency: str = "USD"):
        self.operations_mailbox = operations_mailbox
        self.currency = currency

    async def notify(
        self,
        submission: QuoteSubmission,
        quote: QuoteResult | None,
        locale: Locale,
    ) -> None:
        customer = render_customer_email(submission, quote, locale, self.currency)
        internal = render_internal_email(submission, quote, self.currency)
        logger.info("Email delivery disabled; would send '%s' to %s", customer.subject, submission.email)
        logger.info("Email delivery disabled; would send '%s' to %s", internal.subject, self.operations_mailbox)
