from lcl_quote.models.base import Base, TimestampMixin
from lcl_quote.models.lead import LeadStatus, QuoteLead

__all__ = [
    "Base",
    "TimestampMixin",
    "LeadStatus",
    "QuoteLead",
]
