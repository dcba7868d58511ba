"""
Quote submission pipeline.

validate → resolve requester IP → total volume → normalize mobile →
assemble submission → price → append lead → notify → report.

Single attempt, no retries. Only a validation failure or a failed lead write
fails the submission; IP lookup, pricing and email are best-effort and are
logged when they go wrong.
"""

import asyncio
import logging
import re
from collections.abc import Callable, Container, Sequence
from dataclasses import dataclass
from datetime import datetime

from lcl_quote.calculator.dimensions import package_volume, round_half_up, total_volume
from lcl_quote.calculator.quote import QuoteResult, quote_route
from lcl_quote.calculator.rates import FallbackRates, RateEntry
from lcl_quote.config import Settings
from lcl_quote.i18n import Locale
from lcl_quote.schemas.quote import QuoteSubmissionIn
from lcl_quote.services.ip_resolver import IpResolver
from lcl_quote.services.lead_store import LeadStore
from lcl_quote.services.notifier import Notifier
from lcl_quote.submission.errors import SubmissionTransportError, SubmissionValidationError
from lcl_quote.submission.models import UNKNOWN_IP, PackageLine, QuoteSubmission
from lcl_quote.validation.validator import validate_submission

logger = logging.getLogger("lcl.submission.pipeline")

_NON_DIGITS = re.compile(r"\D")


def normalize_mobile(mobile: str) -> str:
    """Digits only behind a leading "+", e.g. +971-50-123 4567 -> +971501234567."""
    return "+" + _NON_DIGITS.sub("", mobile)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class SubmissionResult:
    submission: QuoteSubmission
    quote: QuoteResult | None
    notified: bool


class SubmissionPipeline:
    """Turns a validated form payload into a recorded, notified lead."""

    def __init__(
        self,
        settings: Settings,
        *,
        ip_resolver: IpResolver,
        lead_store: LeadStore,
        notifier: Notifier,
        rate_table: Sequence[RateEntry],
        fallback_rates: FallbackRates | None = None,
        port_codes: Container[str] | None = None,
        clock: Callable[[], datetime] = _local_now,
    ):
        self.settings = settings
        self.ip_resolver = ip_resolver
        self.lead_store = lead_store
        self.notifier = notifier
        self.rate_table = rate_table
        self.fallback_rates = fallback_rates
        self.port_codes = port_codes
        self.clock = clock
        self.timeout = settings.outbound_timeout_seconds

    def validate(self, payload: QuoteSubmissionIn, locale: Locale) -> dict[str, str]:
        return validate_submission(
            payload,
            locale=locale,
            today=self.clock().date(),
            port_codes=self.port_codes,
            personal_domains=self.settings.personal_email_domains,
            allowed_attachment_types=self.settings.allowed_attachment_types,
            max_attachment_bytes=self.settings.max_attachment_size_mb * 1024 * 1024,
        )

    async def submit(
        self,
        payload: QuoteSubmissionIn,
        *,
        locale: Locale = Locale.EN,
        client_address: str | None = None,
    ) -> SubmissionResult:
        """Run the whole pipeline for one submission.

        Raises:
            SubmissionValidationError: one or more fields are invalid.
            SubmissionTransportError: the lead could not be recorded.
        """
        # 1. Validate
        errors = self.validate(payload, locale)
        if errors:
            logger.info("Submission rejected: %d invalid field(s) %s", len(errors), sorted(errors))
            raise SubmissionValidationError(errors)

        # 2. Requester IP (best-effort)
        requester_ip = await self._resolve_ip(payload.user_ip or client_address)

        # 3-5. Volume, mobile, immutable submission
        submission = self._assemble(payload, requester_ip)

        # 6. Price (best-effort, in-process). Done before the write so the lead
        # row carries the quoted amount.
        quote = self._price(submission)

        # 7. Append lead; the only side effect that can fail the submission
        try:
            await asyncio.wait_for(self.lead_store.append(submission, quote), timeout=self.timeout)
        except Exception as e:
            logger.exception("Lead write failed for %s (%s): %s", submission.company, submission.route, e)
            raise SubmissionTransportError("Failed to record quote request") from e

        # 8. Notify (best-effort)
        notified = await self._notify(submission, quote, locale)

        logger.info(
            "Submission accepted: %s %s, %.3f CBM, quote=%s",
            submission.company,
            submission.route,
            submission.total_cbm,
            quote.amount if quote else "none",
        )
        # 9. Success regardless of whether a price was produced
        return SubmissionResult(submission=submission, quote=quote, notified=notified)

    async def _resolve_ip(self, hint: str | None) -> str:
        try:
            return await asyncio.wait_for(self.ip_resolver.resolve(hint), timeout=self.timeout)
        except Exception as e:
            logger.warning("Requester IP lookup failed, recording %r: %s", UNKNOWN_IP, e)
            return UNKNOWN_IP

    def _assemble(self, payload: QuoteSubmissionIn, requester_ip: str) -> QuoteSubmission:
        packages = tuple(
            PackageLine(
                id=p.id or str(i + 1),
                length=p.length or 0.0,
                width=p.width or 0.0,
                height=p.height or 0.0,
                qty=p.qty or 0,
                volume=package_volume(p.length, p.width, p.height, p.qty),
            )
            for i, p in enumerate(payload.packages)
        )
        return QuoteSubmission(
            port_of_loading=payload.port_of_loading,
            port_of_discharge=payload.port_of_discharge,
            ready_date=payload.ready_date[:10],
            incoterm=payload.incoterm.upper(),
            pickup_address=payload.pickup_address,
            commodity_description=payload.commodity_description,
            gross_weight=payload.gross_weight,
            hazardous=payload.hazardous,
            customs_clearance_required=payload.customs_clearance_required,
            company=payload.company,
            contact_person=payload.contact_person,
            email=payload.email,
            mobile=normalize_mobile(payload.mobile),
            total_cbm=round_half_up(total_volume(payload.packages), 3),
            requester_ip=requester_ip,
            submitted_at=self.clock(),
            packages=packages,
            attachments=tuple(a.name for a in payload.attachments),
        )

    def _price(self, submission: QuoteSubmission) -> QuoteResult | None:
        try:
            quote = quote_route(
                submission.port_of_loading,
                submission.port_of_discharge,
                submission.total_cbm,
                submission.gross_weight,
                self.rate_table,
                self.fallback_rates,
            )
        except Exception as e:
            logger.warning("Quote calculation failed for %s: %s", submission.route, e)
            return None

        if quote is None:
            logger.warning("No rate for %s and no fallback configured; manual pricing needed", submission.route)
        elif quote.used_fallback:
            logger.info("Route %s not in rate table, priced with default rates", submission.route)
        return quote

    async def _notify(self, submission: QuoteSubmission, quote: QuoteResult | None, locale: Locale) -> bool:
        try:
            await asyncio.wait_for(self.notifier.notify(submission, quote, locale), timeout=self.timeout)
        except Exception as e:
            logger.warning("Quote notification failed for %s: %s", submission.email, e)
            return False
        return True
