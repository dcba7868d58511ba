from functools import lru_cache

from fastapi import Depends

from lcl_quote.calculator.rates import DEFAULT_RATE_TABLE, FallbackRates, RateEntry, load_rate_table
from lcl_quote.config import settings
from lcl_quote.database import async_session_factory, engine, get_db
from lcl_quote.ports.directory import Port, load_port_directory
from lcl_quote.services.ip_resolver import IpifyResolver, IpResolver
from lcl_quote.services.lead_store import LeadStore, SheetWebhookLeadStore, SqlLeadStore
from lcl_quote.services.notifier import LoggingNotifier, Notifier, ResendNotifier
from lcl_quote.submission.pipeline import SubmissionPipeline

# Re-export get_db for use in Depends()
get_db = get_db


@lru_cache
def get_port_directory() -> tuple[Port, ...]:
    return load_port_directory(settings.port_directory_path or None)


@lru_cache
def get_rate_table() -> tuple[RateEntry, ...]:
    if settings.rate_table_path:
        return tuple(load_rate_table(settings.rate_table_path))
    return DEFAULT_RATE_TABLE


def get_fallback_rates() -> FallbackRates | None:
    if not settings.rate_fallback_enabled:
        return None
    return FallbackRates(
        rate_per_cbm=settings.default_rate_per_cbm,
        rate_per_ton=settings.default_rate_per_ton,
    )


def get_ip_resolver() -> IpResolver:
    return IpifyResolver(settings.ip_lookup_url, timeout=settings.outbound_timeout_seconds)


@lru_cache
def get_lead_store() -> LeadStore:
    if settings.lead_store_backend == "sheet_webhook":
        return SheetWebhookLeadStore(
            settings.lead_sheet_webhook_url,
            sheet_name=settings.lead_sheet_name,
            timeout=settings.outbound_timeout_seconds,
        )
    return SqlLeadStore(engine, async_session_factory)


def get_notifier() -> Notifier:
    if not settings.resend_api_key:
        return LoggingNotifier(settings.operations_mailbox, currency=settings.quote_currency)
    return ResendNotifier(
        settings.resend_api_key,
        api_url=settings.resend_api_url,
        customer_from=settings.customer_email_from,
        internal_from=settings.internal_email_from,
        operations_mailbox=settings.operations_mailbox,
        currency=settings.quote_currency,
        timeout=settings.outbound_timeout_seconds,
    )


def get_submission_pipeline(
    ip_resolver: IpResolver = Depends(get_ip_resolver),
    lead_store: LeadStore = Depends(get_lead_store),
    notifier: Notifier = Depends(get_notifier),
    rate_table: tuple[RateEntry, ...] = Depends(get_rate_table),
    fallback_rates: FallbackRates | None = Depends(get_fallback_rates),
    ports: tuple[Port, ...] = Depends(get_port_directory),
) -> SubmissionPipeline:
    return SubmissionPipeline(
        settings,
        ip_resolver=ip_resolver,
        lead_store=lead_store,
        notifier=notifier,
        rate_table=rate_table,
        fallback_rates=fallback_rates,
        port_codes=frozenset(p.code for p in ports),
    )
