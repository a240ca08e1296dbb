"""FastAPI application factory and route setup for MockSwift."""

import email.utils
import logging
import secrets
import time

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from mockswift.auth import AUTH_PATHS, TokenAuthenticator
from mockswift.config import MockSwiftConfig
from mockswift.errors import InternalError, MethodNotAllowed, SwiftError
from mockswift.handlers.account import AccountHandler
from mockswift.handlers.container import ContainerHandler
from mockswift.handlers.object import ObjectHandler
from mockswift.logging_config import request_extra
from mockswift.models import ContainerResource, ObjectResource, Resource, RootResource
from mockswift.resolver import resolve
from mockswift.storage import SwiftStore
from mockswift.xml_utils import render_error, xml_response

logger = logging.getLogger(__name__)

SWIFT_METHODS = ["GET", "HEAD", "PUT", "POST", "DELETE", "COPY"]

# Module-level singleton so multiple create_app() calls (e.g. in tests)
# don't re-register the same Prometheus collectors in the global registry.
_instrumentator = None


def _get_instrumentator():
    global _instrumentator
    if _instrumentator is None:
        from prometheus_fastapi_instrumentator import Instrumentator

        _instrumentator = Instrumentator(excluded_handlers=["/metrics"])
    return _instrumentator


def create_store(config: MockSwiftConfig) -> SwiftStore:
    """Create a store seeded with the configured test account."""
    store = SwiftStore()
    store.add_account(config.auth.account, config.auth.password)
    return store


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(config: MockSwiftConfig, store: SwiftStore | None = None) -> FastAPI:
    """Create and configure the MockSwift FastAPI application.

    The store is attached to ``app.state`` immediately (not in a lifespan
    hook) so that ASGI test transports which skip lifespan events see it.

    Args:
        config: The loaded MockSwift configuration.
        store: An existing store to serve; a new seeded one if omitted.

    Returns:
        A configured FastAPI application ready to run.
    """
    app = FastAPI(
        title="MockSwift",
        version="0.1.0",
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.state.config = config
    app.state.store = store if store is not None else create_store(config)
    app.state.authenticator = TokenAuthenticator(app.state.store)

    _register_exception_handlers(app)
    _register_middleware(app, config)

    # /metrics must be registered before the catch-all Swift route.
    if config.observability.metrics:
        import mockswift.metrics as _metrics

        _metrics.init_metrics()
        _get_instrumentator().instrument(app, metric_namespace="mockswift").expose(
            app, endpoint="/metrics"
        )

    _setup_routes(app, config)

    return app


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


def _error_response(request: Request, exc: SwiftError) -> Response:
    """Render a SwiftError. HEAD responses carry no body."""
    if request.method == "HEAD":
        return Response(status_code=exc.http_status)
    body = render_error(
        code=exc.code,
        message=exc.message,
        resource=request.url.path,
        request_id=getattr(request.state, "request_id", ""),
    )
    return xml_response(body, status=exc.http_status)


def _register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI app."""

    @app.exception_handler(SwiftError)
    async def swift_error_handler(request: Request, exc: SwiftError) -> Response:
        return _error_response(request, exc)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> Response:
        """Catch unexpected exceptions and return InternalError."""
        logger.exception("Unhandled exception in request handler")
        return _error_response(request, InternalError())


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


def _register_middleware(app: FastAPI, config: MockSwiftConfig) -> None:
    """Register middleware on the FastAPI app.

    Middleware registered last runs first, so the execution order is:
    common_headers -> auth -> handler.
    """

    _QUIET_PATHS = {"/metrics", "/health"}

    metrics_enabled = config.observability.metrics

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next) -> Response:
        """Require a known X-Auth-Token on Swift API paths.

        Failures are rendered here because FastAPI exception handlers do not
        see exceptions raised from middleware.
        """
        cfg: MockSwiftConfig = app.state.config
        path = request.url.path
        if not cfg.auth.enabled or not path.startswith("/v1/"):
            return await call_next(request)

        try:
            session = app.state.authenticator.verify(request)
        except SwiftError as exc:
            return _error_response(request, exc)

        request.state.username = session.username
        return await call_next(request)

    @app.middleware("http")
    async def common_headers_middleware(request: Request, call_next) -> Response:
        """Add transaction id and Date headers and log the request."""
        request_id = f"tx{secrets.token_hex(11)[:21]}"
        request.state.request_id = request_id
        start = time.monotonic()

        response = await call_next(request)

        duration_ms = round((time.monotonic() - start) * 1000, 2)

        response.headers["X-Trans-Id"] = request_id
        response.headers["X-Openstack-Request-Id"] = request_id
        response.headers["Date"] = email.utils.formatdate(usegmt=True)

        operation = getattr(request.state, "operation", None)
        if metrics_enabled and operation is not None:
            import mockswift.metrics as _m

            store: SwiftStore = app.state.store
            with store.lock:
                containers, objects = store.totals()
            _m.record_operation(operation, response.status_code, containers, objects)
            cl = request.headers.get("content-length")
            if cl and cl.isdigit() and _m.bytes_received_total is not None:
                _m.bytes_received_total.inc(int(cl))
            rcl = response.headers.get("content-length")
            if rcl and rcl.isdigit() and _m.bytes_sent_total is not None:
                _m.bytes_sent_total.inc(int(rcl))

        if request.url.path not in _QUIET_PATHS:
            logger.info(
                "%s %s %d %.2fms",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra=request_extra(
                    method=request.method,
                    path=request.url.path,
                    status=response.status_code,
                    duration_ms=duration_ms,
                    trans_id=request_id,
                    account=getattr(request.state, "account", None),
                    operation=operation,
                ),
            )

        return response


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------


def _resource_kind(resource: Resource) -> str:
    if isinstance(resource, RootResource):
        return "account"
    if isinstance(resource, ContainerResource):
        return "container"
    if isinstance(resource, ObjectResource):
        return "object"
    raise TypeError(f"Unknown resource variant: {resource!r}")


def _setup_routes(app: FastAPI, config: MockSwiftConfig) -> None:
    """Register the auth, health and Swift API routes.

    Every Swift request is resolved against the store and dispatched to the
    account, container or object handler by resource variant and method.
    """
    handlers = {
        "account": AccountHandler(app),
        "container": ContainerHandler(app),
        "object": ObjectHandler(app),
    }

    @app.get("/health")
    async def health_check() -> Response:
        return JSONResponse(content={"status": "ok"})

    for auth_path in AUTH_PATHS:

        @app.get(auth_path)
        async def authenticate(request: Request) -> Response:
            """Issue a session token for X-Auth-User / X-Auth-Key."""
            return app.state.authenticator.issue(request)

    @app.api_route("/{path:path}", methods=SWIFT_METHODS)
    async def handle_swift_request(path: str, request: Request) -> Response:
        """Resolve the path and dispatch to the verb handler.

        The body is read before taking the store lock; nothing awaits while
        the lock is held.
        """
        body = await request.body()
        store: SwiftStore = app.state.store
        with store.lock:
            resource = resolve(store, "/" + path, request.query_params)
            request.state.account = resource.account.name
            kind = _resource_kind(resource)
            request.state.operation = f"{request.method} {kind}"
            method = getattr(handlers[kind], request.method.lower(), None)
            if method is None:
                raise MethodNotAllowed()
            return method(request, resource, body)
