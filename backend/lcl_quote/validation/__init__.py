from lcl_quote.validation.validator import (
    ADDRESS_REQUIRED_INCOTERMS,
    ATTACHMENT_MIME_TYPES,
    INCOTERMS,
    PERSONAL_EMAIL_DOMAINS,
    validate_attachment,
    validate_submission,
)

__all__ = [
    "ADDRESS_REQUIRED_INCOTERMS",
    "ATTACHMENT_MIME_TYPES",
    "INCOTERMS",
    "PERSONAL_EMAIL_DOMAINS",
    "validate_attachment",
    "validate_submission",
]
