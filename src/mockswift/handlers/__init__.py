"""Per-verb Swift request handlers.

Handlers run with ``store.lock`` held and must not await. Each public
method takes the request, the resolved resource and the already-read request
body, and returns a Response or raises a SwiftError.
"""

from fastapi import FastAPI, Request, Response

from mockswift.listing import filter_listing
from mockswift.validation import validate_limit


class BaseHandler:
    """Shared plumbing for the account, container and object handlers.

    Attributes:
        app: The parent FastAPI application.
    """

    def __init__(self, app: FastAPI) -> None:
        self.app = app

    @property
    def store(self):
        """Shortcut to the SwiftStore on app.state."""
        return self.app.state.store

    @property
    def config(self):
        """Shortcut to the MockSwiftConfig on app.state."""
        return self.app.state.config

    @property
    def system_headers(self) -> list[str]:
        return self.config.metadata.system_headers


def listing_response(request: Request, names: list[str], headers: dict[str, str]) -> Response:
    """Build a plain-text listing response, one name per line.

    Honors the ``prefix``, ``delimiter``, ``marker``, ``end_marker`` and
    ``limit`` query parameters. An empty listing is a 204.
    """
    params = request.query_params
    entries = filter_listing(
        names,
        prefix=params.get("prefix", ""),
        delimiter=params.get("delimiter", ""),
        marker=params.get("marker", ""),
        end_marker=params.get("end_marker", ""),
        limit=validate_limit(params.get("limit")),
    )
    if not entries:
        return Response(status_code=204, headers=headers)
    return Response(
        content="".join(f"{name}\n" for name in entries),
        status_code=200,
        headers=headers,
        media_type="text/plain; charset=utf-8",
    )
