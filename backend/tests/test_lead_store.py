"""Tests for lead row formatting and the two lead store backends."""

import json

import httpx
import pytest
from sqlalchemy import select

from lcl_quote.calculator.quote import QuoteResult
from lcl_quote.calculator.revenue_weight import ChargingBasis
from lcl_quote.models.lead import LeadStatus, QuoteLead
from lcl_quote.services.lead_store import (
    LEAD_COLUMNS,
    SheetWebhookLeadStore,
    SqlLeadStore,
    build_lead_row,
    format_package_summary,
)
from lcl_quote.submission.errors import LeadStoreError
from lcl_quote.submission.models import PackageLine

QUOTE = QuoteResult(
    revenue_weight=0.96,
    charging_basis=ChargingBasis.BY_VOLUME,
    unit_rate=45,
    amount=43,
)


class TestLeadRow:
    def test_row_matches_column_order(self, make_submission):
        row = build_lead_row(make_submission(), QUOTE)
        assert len(row) == len(LEAD_COLUMNS)
        record = dict(zip(LEAD_COLUMNS, row))
        assert record["Timestamp"] == "2030-01-10T09:30:00+00:00"
        assert record["Company"] == "Acme Trading LLC"
        assert record["POL"] == "AEJEA"
        assert record["POD"] == "CNSHA"
        assert record["Total CBM"] == 0.96
        assert record["Hazardous"] == "No"
        assert record["Customs"] == "Yes"
        assert record["Packages"] == "2x 100×80×60cm"
        assert record["Attachments"] == "packing-list.pdf"
        assert record["User IP"] == "203.0.113.7"
        assert record["Quote USD"] == 43
        assert record["Status"] == "New"

    def test_no_quote_leaves_amount_blank(self, make_submission):
        record = dict(zip(LEAD_COLUMNS, build_lead_row(make_submission(), None)))
        assert record["Quote USD"] == ""

    def test_package_summary_joins_lines(self):
        packages = (
            PackageLine(id="1", length=100, width=80, height=60, qty=2, volume=0.96),
            PackageLine(id="2", length=50.5, width=40, height=30, qty=1, volume=0.061),
        )
        assert format_package_summary(packages) == "2x 100×80×60cm; 1x 50.5×40×30cm"


class TestSqlLeadStore:
    @pytest.mark.asyncio
    async def test_append_writes_row(self, test_engine, session_factory, make_submission):
        store = SqlLeadStore(test_engine, session_factory)
        await store.append(make_submission(), QUOTE)
        await store.append(make_submission(company="Globex", contact_person=""), None)

        async with session_factory() as session:
            leads = (await session.execute(select(QuoteLead).order_by(QuoteLead.id))).scalars().all()

        assert [lead.company for lead in leads] == ["Acme Trading LLC", "Globex"]
        first, second = leads
        assert first.quote_amount == 43
        assert first.packages == "2x 100×80×60cm"
        assert first.status == LeadStatus.NEW
        assert first.customs_clearance is True
        assert second.quote_amount is None
        assert second.contact_person is None

    @pytest.mark.asyncio
    async def test_creates_table_on_first_write(self, tmp_path, make_submission):
        from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        try:
            await SqlLeadStore(engine, factory).append(make_submission(), QUOTE)
            async with factory() as session:
                count = len((await session.execute(select(QuoteLead))).scalars().all())
            assert count == 1
        finally:
            await engine.dispose()


class TestSheetWebhookLeadStore:
    @pytest.mark.asyncio
    async def test_posts_headers_and_row(self, make_submission):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": "ok"})

        store = SheetWebhookLeadStore(
            "https://sheets.example.com/exec",
            sheet_name="Leads 2030",
            transport=httpx.MockTransport(handler),
        )
        await store.append(make_submission(), QUOTE)

        assert captured["url"] == "https://sheets.example.com/exec"
        assert captured["body"]["sheet"] == "Leads 2030"
        assert captured["body"]["headers"] == list(LEAD_COLUMNS)
        assert captured["body"]["row"][1] == "Acme Trading LLC"
        assert captured["body"]["row"][-2] == 43

    @pytest.mark.asyncio
    async def test_http_error_raises_lead_store_error(self, make_submission):
        store = SheetWebhookLeadStore(
            "https://sheets.example.com/exec",
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )
        with pytest.raises(LeadStoreError):
            await store.append(make_submission(), None)

    @pytest.mark.asyncio
    async def test_connection_error_raises_lead_store_error(self, make_submission):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = SheetWebhookLeadStore("https://sheets.example.com/exec", transport=httpx.MockTransport(handler))
        with pytest.raises(LeadStoreError):
            await store.append(make_submission(), None)

    def test_requires_url(self):
        with pytest.raises(ValueError):
            SheetWebhookLeadStore("")
