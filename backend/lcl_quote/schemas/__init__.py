from lcl_quote.schemas.attachment import AttachmentUploadResponse
from lcl_quote.schemas.health import HealthResponse
from lcl_quote.schemas.port import PortOut, PortSearchResponse
from lcl_quote.schemas.quote import (
    AttachmentRef,
    EstimateRequest,
    EstimateResponse,
    PackageIn,
    QuoteSubmissionIn,
    QuoteSubmitResponse,
    ValidationResponse,
)

__all__ = [
    "AttachmentRef",
    "AttachmentUploadResponse",
    "EstimateRequest",
    "EstimateResponse",
    "HealthResponse",
    "PackageIn",
    "PortOut",
    "PortSearchResponse",
    "QuoteSubmissionIn",
    "QuoteSubmitResponse",
    "ValidationResponse",
]
