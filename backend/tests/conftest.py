from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lcl_quote.models.base import Base
# Import all models so they register with Base.metadata for create_all
import lcl_quote.models  # noqa: F401
from lcl_quote.submission.errors import IpLookupError, LeadStoreError, NotificationError
from lcl_quote.submission.models import PackageLine, QuoteSubmission


# ── Fake collaborators ──


class FakeIpResolver:
    def __init__(self, ip: str = "203.0.113.7", fail: bool = False):
        self.ip = ip
        self.fail = fail
        self.hints: list[str | None] = []

    async def resolve(self, hint=None):
        self.hints.append(hint)
        if self.fail:
            raise IpLookupError("lookup service unreachable")
        return hint or self.ip


class RecordingLeadStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.appended = []

    async def append(self, submission, quote):
        if self.fail:
            raise LeadStoreError("sheet unavailable")
        self.appended.append((submission, quote))


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def notify(self, submission, quote, locale):
        if self.fail:
            raise NotificationError("mail API rejected the request")
        self.sent.append((submission, quote, locale))


# ── Database ──


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
        await session.rollback()


# ── Payloads and submissions ──


@pytest.fixture
def ready_date() -> str:
    return (date.today() + timedelta(days=7)).isoformat()


@pytest.fixture
def valid_payload(ready_date) -> dict:
    """A form body that passes every rule; AEJEA -> CNSHA is in the built-in rate table."""
    return {
        "portOfLoading": "AEJEA",
        "portOfDischarge": "CNSHA",
        "readyDate": ready_date,
        "incoterm": "FOB",
        "pickupAddress": "",
        "commodityDescription": "Machine spare parts",
        "packages": [{"id": 1, "length": 100, "width": 100, "height": 100, "qty": 2}],
        "grossWeight": 500,
        "hazardous": False,
        "customsClearanceRequired": True,
        "attachments": [],
        "company": "Acme Trading LLC",
        "contactPerson": "Sam Carter",
        "email": "sam@acmecorp.com",
        "mobile": "+971 50 123 4567",
    }


@pytest.fixture
def make_submission():
    """Factory for assembled submissions; keyword overrides replace fields."""
    base = QuoteSubmission(
        port_of_loading="AEJEA",
        port_of_discharge="CNSHA",
        ready_date="2030-01-15",
        incoterm="EXW",
        pickup_address="Warehouse 4, Jebel Ali Free Zone",
        commodity_description="Machine spare parts",
        gross_weight=500.0,
        hazardous=False,
        customs_clearance_required=True,
        company="Acme Trading LLC",
        contact_person="Sam Carter",
        email="sam@acmecorp.com",
        mobile="+971501234567",
        total_cbm=0.96,
        requester_ip="203.0.113.7",
        submitted_at=datetime(2030, 1, 10, 9, 30, tzinfo=timezone.utc),
        packages=(PackageLine(id="1", length=100, width=80, height=60, qty=2, volume=0.96),),
        attachments=("packing-list.pdf",),
    )

    def _make(**overrides) -> QuoteSubmission:
        return replace(base, **overrides)

    return _make


# ── API client ──


@pytest.fixture
def ip_resolver():
    return FakeIpResolver()


@pytest.fixture
def lead_store():
    return RecordingLeadStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(db_session, tmp_path, ip_resolver, lead_store, notifier):
    from lcl_quote.config import settings
    from lcl_quote.database import get_db
    from lcl_quote.dependencies import get_ip_resolver, get_lead_store, get_notifier
    from lcl_quote.main import app

    # Override upload dir to temp
    original_upload_dir = settings.upload_dir
    settings.upload_dir = str(tmp_path / "uploads")

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ip_resolver] = lambda: ip_resolver
    app.dependency_overrides[get_lead_store] = lambda: lead_store
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    settings.upload_dir = original_upload_dir
