"""Submission validator: pure functions, no I/O.

Shared by the interactive validation endpoint and the submission pipeline so
both apply exactly the same rules. Every rule is evaluated on every call: the
result maps each invalid field to one message, and an empty dict means valid.
"""

import os
import re
from collections.abc import Collection, Container
from datetime import date

from lcl_quote.i18n import Locale, translate
from lcl_quote.schemas.quote import QuoteSubmissionIn

INCOTERMS = ("EXW", "FCA", "FOB", "CPT", "CIF", "DAP", "DDP")

# Incoterms where we collect from (or deliver to) the customer's address
ADDRESS_REQUIRED_INCOTERMS = frozenset({"EXW", "FCA", "DAP", "DDP"})

PERSONAL_EMAIL_DOMAINS = frozenset({
    "gmail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "icloud.com",
    "protonmail.com",
})

ATTACHMENT_MIME_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024

EMAIL_PATTERN = re.compile(r"^[^@\s]+@([^@\s]+\.[^@\s]+)$")
MOBILE_PATTERN = re.compile(r"^\+?[\d\s\-()]{10,}$")
MIN_MOBILE_DIGITS = 10
_NON_DIGITS = re.compile(r"\D")

REQUIRED_TEXT_FIELDS = {
    "portOfLoading": "port_of_loading",
    "portOfDischarge": "port_of_discharge",
    "readyDate": "ready_date",
    "incoterm": "incoterm",
    "commodityDescription": "commodity_description",
    "company": "company",
    "email": "email",
    "mobile": "mobile",
}


def get_file_extension(filename: str) -> str:
    """Extract the file extension without the dot, lowercased."""
    _, ext = os.path.splitext(filename)
    return ext.lstrip(".").lower()


def get_mime_type(filename: str) -> str:
    """Map file extension to MIME type."""
    return ATTACHMENT_MIME_TYPES.get(get_file_extension(filename), "application/octet-stream")


def is_valid_mobile(mobile: str) -> bool:
    """Phone-number characters only, with at least ten actual digits."""
    return bool(MOBILE_PATTERN.match(mobile)) and len(_NON_DIGITS.sub("", mobile)) >= MIN_MOBILE_DIGITS


def email_domain(email: str) -> str | None:
    """Lower-cased domain of a syntactically valid address, else None."""
    match = EMAIL_PATTERN.match(email.strip())
    return match.group(1).lower() if match else None


def is_company_email(email: str, personal_domains: Container[str] = PERSONAL_EMAIL_DOMAINS) -> bool:
    domain = email_domain(email)
    return domain is not None and domain not in personal_domains


def parse_ready_date(value: str) -> date | None:
    """Accepts YYYY-MM-DD or a full ISO timestamp (date part is used)."""
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def validate_attachment(
    filename: str,
    content_type: str | None = None,
    size: int | None = None,
    *,
    locale: Locale = Locale.EN,
    allowed_types: Collection[str] = ATTACHMENT_MIME_TYPES.keys(),
    max_bytes: int = MAX_ATTACHMENT_BYTES,
) -> str | None:
    """Check one file at selection time. Returns an error message or None.

    `content_type` and `size` are optional because a submission may refer to a
    file only by name once it has been uploaded.
    """
    name = filename or "?"
    ext = get_file_extension(name)
    allowed_mimes = {ATTACHMENT_MIME_TYPES[t] for t in allowed_types if t in ATTACHMENT_MIME_TYPES}

    if ext not in allowed_types or (content_type and content_type.lower() not in allowed_mimes):
        return translate("attachment.type", locale, name=name)

    if size is not None and size > max_bytes:
        return translate("attachment.size", locale, name=name, max_mb=max_bytes // (1024 * 1024))

    return None


def validate_submission(
    submission: QuoteSubmissionIn,
    *,
    locale: Locale = Locale.EN,
    today: date | None = None,
    port_codes: Container[str] | None = None,
    personal_domains: Container[str] = PERSONAL_EMAIL_DOMAINS,
    allowed_attachment_types: Collection[str] = ATTACHMENT_MIME_TYPES.keys(),
    max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
) -> dict[str, str]:
    """Validate a quote submission, returning {field: message} for every failure.

    Args:
        submission: Parsed request body.
        locale: Language of the returned messages.
        today: Reference date for the ready-date rule (defaults to date.today()).
        port_codes: Known port codes. When None, port codes are not checked
            against a directory.
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    def required() -> str:
        return translate("form.required", locale)

    for key, attr in REQUIRED_TEXT_FIELDS.items():
        if not getattr(submission, attr):
            errors[key] = required()

    # Ports
    for key, code in (
        ("portOfLoading", submission.port_of_loading),
        ("portOfDischarge", submission.port_of_discharge),
    ):
        if code and port_codes is not None and code not in port_codes:
            errors[key] = translate("form.unknownPort", locale)

    # Ready date (date-only comparison)
    if submission.ready_date:
        ready = parse_ready_date(submission.ready_date)
        if ready is None:
            errors["readyDate"] = translate("form.invalidDate", locale)
        elif ready < today:
            errors["readyDate"] = translate("form.pastReadyDate", locale)

    # Incoterm and conditional pickup address
    incoterm = submission.incoterm.upper()
    if incoterm and incoterm not in INCOTERMS:
        errors["incoterm"] = translate("form.invalidIncoterm", locale)
    if incoterm in ADDRESS_REQUIRED_INCOTERMS and not submission.pickup_address:
        errors["pickupAddress"] = required()

    # Packages: at least one fully specified line
    eligible = [
        p for p in submission.packages
        if all(v is not None and v > 0 for v in (p.length, p.width, p.height, p.qty))
    ]
    if not eligible:
        errors["packages"] = translate("form.packageRequired", locale)

    # Gross weight
    if submission.gross_weight is None:
        errors["grossWeight"] = required()
    elif submission.gross_weight <= 0:
        errors["grossWeight"] = translate("form.positiveNumber", locale)

    # Email
    if submission.email:
        domain = email_domain(submission.email)
        if domain is None:
            errors["email"] = translate("form.invalidEmail", locale)
        elif domain in personal_domains:
            errors["email"] = translate("form.companyEmail", locale)

    # Mobile
    if submission.mobile and not is_valid_mobile(submission.mobile):
        errors["mobile"] = translate("form.invalidMobile", locale)

    # Attachments
    for i, attachment in enumerate(submission.attachments):
        message = validate_attachment(
            attachment.name,
            attachment.content_type,
            attachment.size,
            locale=locale,
            allowed_types=allowed_attachment_types,
            max_bytes=max_attachment_bytes,
        )
        if message:
            errors[f"attachments.{i}"] = message

    return errors
