"""HTML bodies for the customer confirmation and the internal lead alert.

All user-supplied text is escaped. The customer email follows the request
locale; the internal alert is always English.
"""

from dataclasses import dataclass
from html import escape

from lcl_quote.calculator.dimensions import round_half_up
from lcl_quote.calculator.quote import QuoteResult
from lcl_quote.i18n import Locale, translate
from lcl_quote.services.lead_store import format_number
from lcl_quote.submission.models import QuoteSubmission


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    html: str


def _li(label: str, value) -> str:
    return f"<li><strong>{escape(label)}:</strong> {escape(str(value))}</li>"


def _yes_no(flag: bool, locale: Locale) -> str:
    return translate("options.yes" if flag else "options.no", locale)


def _shipment_items(s: QuoteSubmission, locale: Locale, *, full: bool) -> list[str]:
    items = [
        _li(translate("email.route", locale), s.route),
        _li(translate("email.readyDate", locale), s.ready_date),
        _li(translate("email.incoterm", locale), s.incoterm),
        _li(translate("email.totalCbm", locale), format_number(round_half_up(s.total_cbm, 3))),
        _li(translate("email.grossWeight", locale), f"{format_number(s.gross_weight)} kg"),
        _li(translate("email.commodity", locale), s.commodity_description),
    ]
    if full:
        items.append(_li(translate("email.hazardous", locale), _yes_no(s.hazardous, locale)))
        items.append(_li(translate("email.customs", locale), _yes_no(s.customs_clearance_required, locale)))
    return items


def render_customer_email(
    submission: QuoteSubmission,
    quote: QuoteResult | None,
    locale: Locale,
    currency: str = "USD",
) -> EmailMessage:
    pol, pod = submission.port_of_loading, submission.port_of_discharge
    name = submission.contact_person or translate("email.customer.valuedCustomer", locale)
    direction = "rtl" if locale == Locale.AR else "ltr"

    if quote is not None:
        subject = translate(
            "email.customer.subjectQuote", locale, currency=currency, amount=quote.amount, pol=pol, pod=pod
        )
        lead = (
            f"<p><strong>{escape(translate('email.customer.quote', locale, currency=currency, amount=quote.amount))}"
            "</strong></p>"
        )
        follow_up = translate("email.customer.followUpQuote", locale)
    else:
        subject = translate("email.customer.subjectNoQuote", locale, pol=pol, pod=pod)
        lead = ""
        follow_up = translate("email.customer.followUpNoQuote", locale)

    parts = [
        f'<div dir="{direction}">',
        f"<h2>{escape(translate('email.customer.heading', locale))}</h2>",
        f"<p>{escape(translate('email.customer.greeting', locale, name=name))}</p>",
        lead,
        f"<h3>{escape(translate('email.shipmentDetails', locale))}</h3>",
        "<ul>",
        *_shipment_items(submission, locale, full=False),
        "</ul>",
        f"<p>{escape(follow_up)}</p>",
        # signature contains markup from the catalogue, not user input
        f"<p>{translate('email.customer.signature', locale)}</p>",
        "</div>",
    ]
    return EmailMessage(subject=subject, html="\n".join(p for p in parts if p))


def render_internal_email(
    submission: QuoteSubmission,
    quote: QuoteResult | None,
    currency: str = "USD",
) -> EmailMessage:
    locale = Locale.EN
    s = submission
    subject = translate(
        "email.internal.subject", locale, company=s.company, pol=s.port_of_loading, pod=s.port_of_discharge
    )

    if quote is not None:
        quote_text = f"{currency} {quote.amount}"
        if quote.used_fallback:
            quote_text += f" ({translate('email.internal.fallbackRate', locale)})"
    else:
        quote_text = translate("email.internal.manualPricing", locale)

    package_items = [
        f"<li>{p.qty} x {format_number(p.length)}×{format_number(p.width)}×{format_number(p.height)}cm "
        f"({format_number(p.volume)} CBM)</li>"
        for p in s.packages
    ]

    parts = [
        f"<h2>{translate('email.internal.heading', locale)}</h2>",
        f"<p><strong>{translate('email.internal.quoteGenerated', locale)}:</strong> {escape(quote_text)}</p>",
        f"<h3>{translate('email.customerDetails', locale)}</h3>",
        "<ul>",
        _li(translate("email.company", locale), s.company),
        _li(translate("email.contact", locale), s.contact_person or translate("email.notProvided", locale)),
        _li(translate("email.email", locale), s.email),
        _li(translate("email.mobile", locale), s.mobile),
        "</ul>",
        f"<h3>{translate('email.shipmentDetails', locale)}</h3>",
        "<ul>",
        *_shipment_items(s, locale, full=True),
        "</ul>",
    ]
    if s.pickup_address:
        parts.append(
            f"<p><strong>{translate('email.pickupAddress', locale)}:</strong> {escape(s.pickup_address)}</p>"
        )
    if package_items:
        parts += [f"<h3>{translate('email.packageDetails', locale)}</h3>", "<ul>", *package_items, "</ul>"]
    if s.attachments:
        parts.append(
            f"<p><strong>{translate('email.attachments', locale)}:</strong> {escape(', '.join(s.attachments))}</p>"
        )
    parts += [
        f"<p><strong>{translate('email.userIp', locale)}:</strong> {escape(s.requester_ip)}</p>",
        f"<p><strong>{translate('email.timestamp', locale)}:</strong> {escape(s.submitted_at.isoformat())}</p>",
    ]
    return EmailMessage(subject=subject, html="\n".join(parts))
