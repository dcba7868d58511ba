import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, ValidationError
from pydantic.alias_generators import to_camel

from lcl_quote.calculator.dimensions import package_volume, round_half_up, total_volume
from lcl_quote.calculator.quote import quote_route
from lcl_quote.calculator.rates import FallbackRates, RateEntry
from lcl_quote.calculator.revenue_weight import KG_PER_TON
from lcl_quote.config import settings
from lcl_quote.dependencies import get_fallback_rates, get_rate_table, get_submission_pipeline
from lcl_quote.i18n import Locale, resolve_locale, translate
from lcl_quote.schemas.quote import (
    EstimateRequest,
    EstimateResponse,
    QuoteSubmissionIn,
    QuoteSubmitResponse,
    ValidationResponse,
)
from lcl_quote.submission.errors import SubmissionTransportError, SubmissionValidationError
from lcl_quote.submission.pipeline import SubmissionPipeline

logger = logging.getLogger("lcl.api.quotes")

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

FORM_PAYLOAD_FIELDS = ("data", "payload")


def _submission_field_keys() -> dict[str, str]:
    """Every accepted input name (attribute, camelCase, legacy alias) -> camelCase error key."""
    keys: dict[str, str] = {}
    for name, field in QuoteSubmissionIn.model_fields.items():
        camel = to_camel(name)
        names = {name, camel}
        if isinstance(field.validation_alias, AliasChoices):
            names.update(c for c in field.validation_alias.choices if isinstance(c, str))
        keys.update({n: camel for n in names})
    return keys


SUBMISSION_FIELD_KEYS = _submission_field_keys()


class BadPayload(ValueError):
    pass


async def _read_payload(request: Request) -> dict:
    """JSON body, or a form post carrying the JSON in a `data`/`payload` field."""
    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = await request.form()
            raw = next((form[f] for f in FORM_PAYLOAD_FIELDS if f in form), None)
            if not isinstance(raw, str):
                raise BadPayload("Form body has no JSON 'data' field")
            payload = json.loads(raw)
        else:
            payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadPayload(f"Body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise BadPayload("Body must be a JSON object")
    return payload


def _request_locale(request: Request, payload: dict) -> Locale:
    requested = payload.get("locale") or request.headers.get("accept-language")
    return resolve_locale(requested if isinstance(requested, str) else None, settings.default_locale)


def _client_address(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def _field_errors(exc: ValidationError, locale: Locale) -> dict[str, str]:
    """Collapse pydantic errors to {camelCaseField[.index...]: message}."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [to_camel(p) if isinstance(p, str) and "_" in p else str(p) for p in err["loc"]]
        key = ".".join(loc) or "body"
        errors.setdefault(key, translate("form.invalidValue", locale))
    return errors


def _all_errors(
    raw: dict,
    exc: ValidationError,
    pipeline: SubmissionPipeline,
    locale: Locale,
) -> dict[str, str]:
    """Type errors plus every rule failure among the fields that did parse."""
    type_errors = _field_errors(exc, locale)
    bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
    parsed = {k: v for k, v in raw.items() if k not in bad_fields}
    try:
        partial = QuoteSubmissionIn.model_validate(parsed)
    except ValidationError:
        return type_errors

    # A field that failed to parse reads as missing; its type error wins
    bad_keys = {SUBMISSION_FIELD_KEYS.get(f, f) for f in bad_fields if isinstance(f, str)}
    rule_errors = {
        key: message
        for key, message in pipeline.validate(partial, locale).items()
        if key.split(".")[0] not in bad_keys
    }
    return {**rule_errors, **type_errors}


def _envelope(body: QuoteSubmitResponse, status_code: int) -> JSONResponse:
    return JSONResponse(
        content=body.model_dump(by_alias=True, exclude_none=True),
        status_code=status_code,
        headers=CORS_HEADERS,
    )


@router.options("")
async def quote_preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post("", response_model=QuoteSubmitResponse)
async def submit_quote(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
) -> JSONResponse:
    try:
        raw = await _read_payload(request)
    except BadPayload as e:
        logger.info("Unreadable quote submission: %s", e)
        locale = resolve_locale(request.headers.get("accept-language"), settings.default_locale)
        return _envelope(
            QuoteSubmitResponse(success=False, error=translate("error.badRequest", locale)),
            status_code=400,
        )

    locale = _request_locale(request, raw)

    try:
        payload = QuoteSubmissionIn.model_validate(raw)
    except ValidationError as e:
        return _envelope(
            QuoteSubmitResponse(
                success=False,
                error=translate("error.validation", locale),
                errors=_all_errors(raw, e, pipeline, locale),
            ),
            status_code=422,
        )

    try:
        result = await pipeline.submit(payload, locale=locale, client_address=_client_address(request))
    except SubmissionValidationError as e:
        return _envelope(
            QuoteSubmitResponse(success=False, error=translate("error.validation", locale), errors=e.errors),
            status_code=422,
        )
    except SubmissionTransportError:
        return _envelope(
            QuoteSubmitResponse(success=False, error=translate("error.general", locale)),
            status_code=500,
        )

    return _envelope(
        QuoteSubmitResponse(
            success=True,
            quote=result.quote.amount if result.quote else None,
            message=translate("success.message", locale),
        ),
        status_code=200,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_quote(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
) -> ValidationResponse:
    """Run the submission rules without submitting (used while the form is filled in)."""
    try:
        raw = await _read_payload(request)
    except BadPayload:
        locale = resolve_locale(request.headers.get("accept-language"), settings.default_locale)
        return ValidationResponse(valid=False, errors={"body": translate("error.badRequest", locale)})

    locale = _request_locale(request, raw)
    try:
        payload = QuoteSubmissionIn.model_validate(raw)
    except ValidationError as e:
        return ValidationResponse(valid=False, errors=_all_errors(raw, e, pipeline, locale))

    errors = pipeline.validate(payload, locale)
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/estimate", response_model=EstimateResponse)
async def estimate_quote(
    body: EstimateRequest,
    rate_table: tuple[RateEntry, ...] = Depends(get_rate_table),
    fallback_rates: FallbackRates | None = Depends(get_fallback_rates),
) -> EstimateResponse:
    """Instant indicative price; nothing is stored or sent."""
    volumes = [package_volume(p.length, p.width, p.height, p.qty) for p in body.packages]
    volume = round_half_up(total_volume(body.packages), 3)

    quote = quote_route(
        body.port_of_loading,
        body.port_of_discharge,
        volume,
        body.gross_weight,
        rate_table,
        fallback_rates,
    )

    response = EstimateResponse(
        available=quote is not None,
        currency=settings.quote_currency,
        package_volumes=volumes,
        total_volume=volume,
        weight_in_tons=body.gross_weight / KG_PER_TON,
    )
    if quote is not None:
        response.revenue_weight = quote.revenue_weight
        response.charging_basis = quote.charging_basis
        response.unit_rate = quote.unit_rate
        response.amount = quote.amount
        response.used_fallback = quote.used_fallback
    return response
