"""
Lead persistence.

Every submission becomes one appended row in a fixed column order. Two
backends: a SQL table (SQLAlchemy async) and a spreadsheet web app reached
over HTTP. Appends are not idempotent; a retried request writes twice.
"""

import logging
from typing import Protocol

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lcl_quote.calculator.quote import QuoteResult
from lcl_quote.models.base import Base
from lcl_quote.models.lead import LeadStatus, QuoteLead
from lcl_quote.submission.errors import LeadStoreError
from lcl_quote.submission.models import PackageLine, QuoteSubmission

logger = logging.getLogger("lcl.lead_store")

LEAD_COLUMNS = (
    "Timestamp",
    "Company",
    "Contact Person",
    "Email",
    "Mobile",
    "POL",
    "POD",
    "Ready Date",
    "Incoterm",
    "Pickup Address",
    "Commodity",
    "Total CBM",
    "Gross Weight (kg)",
    "Hazardous",
    "Customs",
    "Packages",
    "Attachments",
    "User IP",
    "Quote USD",
    "Status",
)


class LeadStore(Protocol):
    async def append(self, submission: QuoteSubmission, quote: QuoteResult | None) -> None: ...


def format_number(value: float) -> str:
    """100.0 -> "100", 0.96 -> "0.96"."""
    return f"{value:g}"


def format_package_summary(packages: tuple[PackageLine, ...]) -> str:
    """e.g. "2x 100×80×60cm; 1x 50×40×30cm"."""
    return "; ".join(
        f"{p.qty}x {format_number(p.length)}×{format_number(p.width)}×{format_number(p.height)}cm"
        for p in packages
    )


def build_lead_row(submission: QuoteSubmission, quote: QuoteResult | None) -> list:
    """One sheet row, in LEAD_COLUMNS order."""
    return [
        submission.submitted_at.isoformat(),
        submission.company,
        submission.contact_person,
        submission.email,
        submission.mobile,
        submission.port_of_loading,
        submission.port_of_discharge,
        submission.ready_date,
        submission.incoterm,
        submission.pickup_address,
        submission.commodity_description,
        submission.total_cbm,
        submission.gross_weight,
        "Yes" if submission.hazardous else "No",
        "Yes" if submission.customs_clearance_required else "No",
        format_package_summary(submission.packages),
        ", ".join(submission.attachments),
        submission.requester_ip,
        quote.amount if quote is not None else "",
        LeadStatus.NEW.value,
    ]


class SqlLeadStore:
    """Appends leads to the quote_leads table, creating it on first write."""

    def __init__(self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]):
        self.engine = engine
        self.session_factory = session_factory
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=[QuoteLead.__table__])
        self._schema_ready = True

    async def append(self, submission: QuoteSubmission, quote: QuoteResult | None) -> None:
        lead = QuoteLead(
            submitted_at=submission.submitted_at,
            company=submission.company,
            contact_person=submission.contact_person or None,
            email=submission.email,
            mobile=submission.mobile,
            port_of_loading=submission.port_of_loading,
            port_of_discharge=submission.port_of_discharge,
            ready_date=submission.ready_date,
            incoterm=submission.incoterm,
            pickup_address=submission.pickup_address or None,
            commodity=submission.commodity_description,
            total_cbm=submission.total_cbm,
            gross_weight_kg=submission.gross_weight,
            hazardous=submission.hazardous,
            customs_clearance=submission.customs_clearance_required,
            packages=format_package_summary(submission.packages),
            attachments=", ".join(submission.attachments) or None,
            user_ip=submission.requester_ip,
            quote_amount=quote.amount if quote is not None else None,
            status=LeadStatus.NEW,
        )

        try:
            await self._ensure_schema()
            async with self.session_factory() as session:
                session.add(lead)
                await session.commit()
        except SQLAlchemyError as e:
            raise LeadStoreError(f"Failed to write lead to database: {e}") from e

        logger.info("Lead %s recorded for %s (%s)", lead.id, submission.company, submission.route)


class SheetWebhookLeadStore:
    """Posts each row to a spreadsheet web app.

    The web app owns the sheet: it inserts the header row (LEAD_COLUMNS) when
    the tab does not exist yet and appends the row below the last one.
    """

    def __init__(
        self,
        webhook_url: str,
        sheet_name: str = "Quote Leads",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not webhook_url:
            raise ValueError("SheetWebhookLeadStore requires a webhook URL")
        self.webhook_url = webhook_url
        self.sheet_name = sheet_name
        self.timeout = timeout
        self.transport = transport

    async def append(self, submission: QuoteSubmission, quote: QuoteResult | None) -> None:
        payload = {
            "sheet": self.sheet_name,
            "headers": list(LEAD_COLUMNS),
            "row": build_lead_row(submission, quote),
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise LeadStoreError(f"Failed to append lead to sheet '{self.sheet_name}': {e}") from e

        logger.info("Lead appended to sheet '%s' for %s (%s)", self.sheet_name, submission.company, submission.route)
