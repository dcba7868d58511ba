"""CORS for the API, minus the paths that answer their own preflight."""

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PathExemptCORSMiddleware(CORSMiddleware):
    """Starlette's CORSMiddleware, skipped for `exempt_paths`.

    The quote ingress publishes a fixed header set (POST, OPTIONS and
    Content-Type only) from its own OPTIONS route and responses; the stock
    middleware would answer its preflights with the app-wide set instead.
    """

    def __init__(self, app: ASGIApp, exempt_paths: tuple[str, ...] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exempt_paths = frozenset(p.rstrip("/") for p in exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].rstrip("/") in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
