"""ORM model for the append-only quote lead log.

Column order mirrors the lead sheet: one row per submission, never updated.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    Float,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from lcl_quote.models.base import Base, TimestampMixin


class LeadStatus(str, enum.Enum):
    NEW = "New"


class QuoteLead(Base, TimestampMixin):
    __tablename__ = "quote_leads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    company: Mapped[str] = mapped_column(String(300), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    mobile: Mapped[str] = mapped_column(String(40), nullable=False)
    port_of_loading: Mapped[str] = mapped_column(String(10), nullable=False)
    port_of_discharge: Mapped[str] = mapped_column(String(10), nullable=False)
    ready_date: Mapped[str] = mapped_column(String(10), nullable=False)
    incoterm: Mapped[str] = mapped_column(String(3), nullable=False)
    pickup_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    commodity: Mapped[str] = mapped_column(Text, nullable=False)
    total_cbm: Mapped[float] = mapped_column(Float, nullable=False)
    gross_weight_kg: Mapped[float] = mapped_column(Float, nullable=False)
    hazardous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    customs_clearance: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    packages: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_ip: Mapped[str] = mapped_column(String(64), nullable=False)
    quote_amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[LeadStatus] = mapped_column(
        SAEnum(LeadStatus, name="lead_status", values_callable=lambda e: [m.value for m in e]),
        default=LeadStatus.NEW,
        nullable=False,
    )
