"""Application factory for the storefront HTTP API.

The factory builds a FastAPI app around an already-initialised domain. The
notifier and the identity adapter are constructed here (or passed in by the
caller) and live on ``app.state``; nothing is kept in module globals.
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.domain import Domain

from storefront.api.admin import admin_router
from storefront.api.errors import register_error_handlers
from storefront.api.menu import cart_router, menu_router
from storefront.api.orders import order_router
from storefront.api.reviews import review_router
from storefront.api.users import user_router
from storefront.domain import storefront
from storefront.identity.port import HeaderIdentityAdapter, IdentityPort
from storefront.notifications.channel.smtp_email import email_adapter_from_env
from storefront.notifications.notifier import Notifier
from storefront.utils.logging import bind_request_context, clear_request_context


def create_app(
    notifier: Notifier | None = None,
    identity: IdentityPort | None = None,
    domain: Domain = storefront,
) -> FastAPI:
    app = FastAPI(
        title="Burgerhub API",
        description="Burger storefront: menu, burger builder, orders, reviews and back office",
    )
    app.state.notifier = notifier or Notifier(email_adapter_from_env())
    app.state.identity = identity or HeaderIdentityAdapter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the domain context and tag log lines for each request."""
        bind_request_context(request_id=uuid4().hex[:12], path=request.url.path, method=request.method)
        try:
            with domain.domain_context():
                response = await call_next(request)
        finally:
            clear_request_context()
        return response

    register_error_handlers(app)

    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(review_router)
    app.include_router(user_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
