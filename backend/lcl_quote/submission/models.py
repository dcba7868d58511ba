"""The assembled, immutable quote submission handed to the collaborators."""

from dataclasses import dataclass, field
from datetime import datetime

UNKNOWN_IP = "Unknown"


@dataclass(frozen=True)
class PackageLine:
    id: str
    length: float
    width: float
    height: float
    qty: int
    volume: float


@dataclass(frozen=True)
class QuoteSubmission:
    """One form submission after validation and normalization.

    Created once per request; nothing in this service updates it afterwards.
    """

    port_of_loading: str
    port_of_discharge: str
    ready_date: str
    incoterm: str
    pickup_address: str
    commodity_description: str
    gross_weight: float
    hazardous: bool
    customs_clearance_required: bool
    company: str
    contact_person: str
    email: str
    mobile: str
    total_cbm: float
    requester_ip: str
    submitted_at: datetime
    packages: tuple[PackageLine, ...] = field(default_factory=tuple)
    attachments: tuple[str, ...] = field(default_factory=tuple)

    @property
    def route(self) -> str:
        return f"{self.port_of_loading} → {self.port_of_discharge}"
