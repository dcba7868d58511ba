"""Request/response models for the quote endpoints.

Request models are deliberately lenient: missing or blank fields parse to
empty values so the submission validator can report every problem at once
instead of pydantic stopping at the first type error.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lcl_quote.calculator.revenue_weight import ChargingBasis


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PackageIn(CamelModel):
    id: str | None = None
    length: float | None = None
    width: float | None = None
    height: float | None = None
    qty: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return None if v is None else str(v)

    @field_validator("length", "width", "height", "qty", mode="before")
    @classmethod
    def _blank_numbers(cls, v):
        return _blank_to_none(v)


class AttachmentRef(CamelModel):
    """A file picked on the form. Bare file names are accepted too."""

    name: str
    content_type: str | None = None
    size: int | None = None
    stored_name: str | None = None


class QuoteSubmissionIn(CamelModel):
    # Shipment
    port_of_loading: str = Field("", validation_alias=AliasChoices("portOfLoading", "pol", "port_of_loading"))
    port_of_discharge: str = Field("", validation_alias=AliasChoices("portOfDischarge", "pod", "port_of_discharge"))
    ready_date: str = ""
    incoterm: str = ""
    pickup_address: str = ""
    commodity_description: str = Field(
        "", validation_alias=AliasChoices("commodityDescription", "commodity", "commodity_description")
    )
    packages: list[PackageIn] = Field(default_factory=list)
    gross_weight: float | None = None
    hazardous: bool = False
    customs_clearance_required: bool = Field(
        False, validation_alias=AliasChoices("customsClearanceRequired", "customs", "customs_clearance_required")
    )
    attachments: list[AttachmentRef] = Field(default_factory=list)

    # Contact
    company: str = ""
    contact_person: str = ""
    email: str = ""
    mobile: str = ""

    # Client-side hints
    user_ip: str | None = Field(None, validation_alias=AliasChoices("userIP", "userIp", "user_ip"))
    locale: str | None = None

    @field_validator(
        "port_of_loading",
        "port_of_discharge",
        "ready_date",
        "incoterm",
        "pickup_address",
        "commodity_description",
        "company",
        "contact_person",
        "email",
        "mobile",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("gross_weight", "user_ip", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return _blank_to_none(v)

    @field_validator("packages", "attachments", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return [] if v is None else v

    @field_validator("attachments", mode="before")
    @classmethod
    def _names_to_refs(cls, v):
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v


class QuoteSubmitResponse(CamelModel):
    success: bool
    quote: int | None = None
    message: str | None = None
    error: str | None = None
    errors: dict[str, str] | None = None


class ValidationResponse(CamelModel):
    valid: bool
    errors: dict[str, str]


class EstimateRequest(CamelModel):
    port_of_loading: str = Field(..., validation_alias=AliasChoices("portOfLoading", "pol", "port_of_loading"))
    port_of_discharge: str = Field(..., validation_alias=AliasChoices("portOfDischarge", "pod", "port_of_discharge"))
    packages: list[PackageIn] = Field(default_factory=list)
    gross_weight: float = Field(0.0, ge=0)


class EstimateResponse(CamelModel):
    available: bool
    currency: str
    package_volumes: list[float]
    total_volume: float
    weight_in_tons: float
    revenue_weight: float | None = None
    charging_basis: ChargingBasis | None = None
    unit_rate: float | None = None
    amount: int | None = None
    used_fallback: bool = False
