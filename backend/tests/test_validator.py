"""Tests for the submission validator and its helpers (pure, no I/O)."""

from datetime import date, timedelta

import pytest

from lcl_quote.i18n import Locale
from lcl_quote.schemas.quote import QuoteSubmissionIn
from lcl_quote.validation.validator import (
    email_domain,
    get_file_extension,
    get_mime_type,
    is_company_email,
    is_valid_mobile,
    parse_ready_date,
    validate_attachment,
    validate_submission,
)

TODAY = date(2030, 1, 10)
PORT_CODES = frozenset({"AEJEA", "CNSHA", "USNYC"})


@pytest.fixture
def payload() -> dict:
    return {
        "portOfLoading": "AEJEA",
        "portOfDischarge": "CNSHA",
        "readyDate": "2030-01-15",
        "incoterm": "FOB",
        "commodityDescription": "Machine spare parts",
        "packages": [{"length": 100, "width": 80, "height": 60, "qty": 2}],
        "grossWeight": 500,
        "company": "Acme Trading LLC",
        "email": "sam@acmecorp.com",
        "mobile": "+971 50 123 4567",
    }


def run(data: dict, locale: Locale = Locale.EN) -> dict[str, str]:
    return validate_submission(
        QuoteSubmissionIn.model_validate(data),
        locale=locale,
        today=TODAY,
        port_codes=PORT_CODES,
    )


class TestValidateSubmission:
    def test_valid_payload_has_no_errors(self, payload):
        assert run(payload) == {}

    def test_reports_every_failure_at_once(self, payload):
        payload["email"] = "x@gmail.com"
        payload["mobile"] = "123"
        errors = run(payload)
        assert set(errors) == {"email", "mobile"}
        assert errors["email"] == "Please use your company email"
        assert errors["mobile"] == "Please enter a valid mobile number"

    def test_missing_email_and_past_ready_date(self, payload):
        payload["email"] = ""
        payload["readyDate"] = "2020-06-01"
        assert run(payload) == {
            "email": "This field is required",
            "readyDate": "Ready date must be today or in the future",
        }

    def test_empty_body_lists_all_required_fields(self):
        errors = run({})
        for key in (
            "portOfLoading",
            "portOfDischarge",
            "readyDate",
            "incoterm",
            "commodityDescription",
            "company",
            "email",
            "mobile",
            "packages",
            "grossWeight",
        ):
            assert key in errors
        assert errors["company"] == "This field is required"

    def test_contact_person_is_optional(self, payload):
        payload["contactPerson"] = ""
        assert run(payload) == {}

    def test_unknown_port(self, payload):
        payload["portOfDischarge"] = "XXXXX"
        assert run(payload) == {"portOfDischarge": "Please select a port from the list"}

    def test_ports_not_checked_without_directory(self, payload):
        payload["portOfDischarge"] = "XXXXX"
        errors = validate_submission(QuoteSubmissionIn.model_validate(payload), today=TODAY)
        assert errors == {}

    def test_ready_date_today_is_allowed(self, payload):
        payload["readyDate"] = TODAY.isoformat()
        assert run(payload) == {}

    def test_ready_date_in_past(self, payload):
        payload["readyDate"] = (TODAY - timedelta(days=1)).isoformat()
        assert run(payload) == {"readyDate": "Ready date must be today or in the future"}

    def test_ready_date_unparseable(self, payload):
        payload["readyDate"] = "next tuesday"
        assert "readyDate" in run(payload)

    def test_invalid_incoterm(self, payload):
        payload["incoterm"] = "XYZ"
        assert run(payload) == {"incoterm": "Please select a valid incoterm"}

    @pytest.mark.parametrize("incoterm", ["EXW", "FCA", "DAP", "DDP", "exw"])
    def test_pickup_address_required_for_door_incoterms(self, payload, incoterm):
        payload["incoterm"] = incoterm
        assert run(payload) == {"pickupAddress": "This field is required"}

    @pytest.mark.parametrize("incoterm", ["FOB", "CPT", "CIF"])
    def test_pickup_address_not_required_for_port_incoterms(self, payload, incoterm):
        payload["incoterm"] = incoterm
        assert run(payload) == {}

    def test_whitespace_pickup_address_counts_as_missing(self, payload):
        payload["incoterm"] = "EXW"
        payload["pickupAddress"] = "   "
        assert "pickupAddress" in run(payload)

    def test_needs_one_complete_package(self, payload):
        payload["packages"] = [{"length": 100, "width": 80, "height": "", "qty": 2}]
        assert "packages" in run(payload)

    def test_one_complete_package_is_enough(self, payload):
        payload["packages"].append({"length": 100, "width": None, "height": 50, "qty": 1})
        assert run(payload) == {}

    def test_gross_weight_missing(self, payload):
        payload["grossWeight"] = ""
        assert run(payload) == {"grossWeight": "This field is required"}

    def test_gross_weight_zero(self, payload):
        payload["grossWeight"] = 0
        assert run(payload) == {"grossWeight": "Must be greater than zero"}

    @pytest.mark.parametrize("mobile", ["(----------)", "+ ( ) - - - - - -", "123-456-789"])
    def test_mobile_needs_ten_digits(self, payload, mobile):
        payload["mobile"] = mobile
        assert run(payload) == {"mobile": "Please enter a valid mobile number"}

    def test_malformed_email(self, payload):
        payload["email"] = "not-an-email"
        assert run(payload) == {"email": "Please enter a valid email address"}

    def test_attachment_errors_are_indexed(self, payload):
        payload["attachments"] = ["packing-list.pdf", "setup.exe"]
        errors = run(payload)
        assert list(errors) == ["attachments.1"]
        assert "setup.exe" in errors["attachments.1"]

    def test_arabic_messages(self, payload):
        payload["company"] = ""
        errors = run(payload, Locale.AR)
        assert errors["company"] == "هذا الحقل مطلوب"


class TestValidateAttachment:
    def test_accepts_pdf(self):
        assert validate_attachment("invoice.pdf", "application/pdf", 1024) is None

    def test_extension_is_case_insensitive(self):
        assert validate_attachment("SCAN.JPG", "image/jpeg", 2048) is None

    def test_rejects_unknown_extension(self):
        assert validate_attachment("archive.zip", "application/zip", 10) is not None

    def test_rejects_mismatched_content_type(self):
        assert validate_attachment("invoice.pdf", "text/html", 10) is not None

    def test_rejects_oversized_file(self):
        message = validate_attachment("drawing.png", "image/png", 10 * 1024 * 1024 + 1)
        assert message == "drawing.png: file is larger than 10MB"

    def test_exactly_ten_megabytes_is_allowed(self):
        assert validate_attachment("drawing.png", "image/png", 10 * 1024 * 1024) is None


class TestHelpers:
    def test_get_file_extension(self):
        assert get_file_extension("Quote.Request.XLSX") == "xlsx"
        assert get_file_extension("noextension") == ""

    def test_is_valid_mobile(self):
        assert is_valid_mobile("+971 (50) 123-4567") is True
        assert is_valid_mobile("0501234567") is True
        assert is_valid_mobile("(----------)") is False

    def test_get_mime_type(self):
        assert get_mime_type("scan.JPG") == "image/jpeg"
        assert get_mime_type("drawing.dwg") == "application/octet-stream"

    def test_email_domain(self):
        assert email_domain("Sam@AcmeCorp.com") == "acmecorp.com"
        assert email_domain("sam@localhost") is None

    def test_company_email(self):
        assert is_company_email("sam@acmecorp.com") is True
        assert is_company_email("sam@gmail.com") is False
        assert is_company_email("garbage") is False

    def test_parse_ready_date(self):
        assert parse_ready_date("2030-01-15") == date(2030, 1, 15)
        assert parse_ready_date("2030-01-15T08:00:00Z") == date(2030, 1, 15)
        assert parse_ready_date("15/01/2030") is None
