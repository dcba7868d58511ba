import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lcl_quote.api.router import api_router
from lcl_quote.config import settings
from lcl_quote.middleware.cors import PathExemptCORSMiddleware
from lcl_quote.middleware.logging import RequestLoggingMiddleware

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)

logger = logging.getLogger("lcl.main")

API_PREFIX = "/api"
# Sets its own CORS headers (quotes.CORS_HEADERS)
QUOTE_INGRESS_PATH = f"{API_PREFIX}/v1/quotes"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.sentry_dsn:
        try:
            import sentry_sdk
            sentry_sdk.init(
                dsn=settings.sentry_dsn,
                traces_sample_rate=0.1,
                environment=settings.environment,
            )
            logger.info("Sentry initialized (env=%s)", settings.environment)
        except Exception as e:
            logger.warning("Failed to initialize Sentry: %s", e)

    logger.info(
        "Starting LCL quote service (env=%s, lead_store=%s, rate_table=%s)",
        settings.environment,
        settings.lead_store_backend,
        settings.rate_table_path or "built-in",
    )
    yield
    logger.info("Shutting down LCL quote service")


app = FastAPI(
    title="LCL Quote Service",
    description="LCL sea-freight quote requests: validation, instant pricing, lead capture and notification",
    version="0.1.0",
    lifespan=lifespan,
)

# The form is embedded on third-party pages, so any origin may post (no cookies)
app.add_middleware(
    PathExemptCORSMiddleware,
    exempt_paths=(QUOTE_INGRESS_PATH,),
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept-Language"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=API_PREFIX)
