"""
Cross-origin policy.

- No Origin header (curl, server-to-server): untouched.
- Origin exactly in the allow-list, or ending with a trusted suffix:
  the origin is echoed back and credentials are allowed.
- Anything else is denied silently: the response is served without any
  Access-Control-* header. Preflights get an empty 204 rather than an
  error body.
"""

from collections.abc import Sequence

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send


class TrustedOriginCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that also trusts origins by domain suffix."""

    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Sequence[str] = (),
        trusted_suffixes: Sequence[str] = (),
    ) -> None:
        super().__init__(
            app,
            allow_origins=list(allowed_origins),
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )
        self.trusted_suffixes = tuple(trusted_suffixes)

    def is_allowed_origin(self, origin: str) -> bool:
        if origin in self.allow_origins:
            return True
        return bool(self.trusted_suffixes) and origin.endswith(self.trusted_suffixes)

    def preflight_response(self, request_headers: Headers) -> Response:
        if not self.is_allowed_origin(origin=request_headers["origin"]):
            return Response(status_code=204)
        return super().preflight_response(request_headers=request_headers)

    async def simple_response(
        self, scope: Scope, receive: Receive, send: Send, request_headers: Headers
    ) -> None:
        if not self.is_allowed_origin(origin=request_headers["origin"]):
            await self.app(scope, receive, send)
            return
        await super().simple_response(scope, receive, send, request_headers=request_headers)
