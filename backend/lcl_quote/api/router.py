from fastapi import APIRouter

from lcl_quote.api.v1 import attachments, health, ports, quotes

api_router = APIRouter()

api_router.include_router(health.router, prefix="/v1", tags=["health"])
api_router.include_router(quotes.router, prefix="/v1/quotes", tags=["quotes"])
api_router.include_router(ports.router, prefix="/v1/ports", tags=["ports"])
api_router.include_router(attachments.router, prefix="/v1/attachments", tags=["attachments"])
