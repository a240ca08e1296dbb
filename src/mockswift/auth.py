"""Token authentication for MockSwift.

Implements the v1.0 auth handshake Swift clients start with: the client
sends ``X-Auth-User`` / ``X-Auth-Key``, and receives an ``X-Auth-Token`` plus
the ``X-Storage-Url`` of its account. Subsequent API requests present the
token, which only has to name a known session.
"""

import logging

from fastapi import Request, Response

from mockswift.errors import Unauthorized
from mockswift.models import Session
from mockswift.storage import SwiftStore

logger = logging.getLogger(__name__)

AUTH_PATHS = ("/auth/v1.0", "/auth/v1", "/v1.0")


class TokenAuthenticator:
    """Issues and verifies session tokens against the in-memory store.

    Attributes:
        store: The store holding accounts and sessions.
    """

    def __init__(self, store: SwiftStore) -> None:
        self.store = store

    def issue(self, request: Request) -> Response:
        """Handle a v1.0 auth request.

        ``X-Auth-User`` may be ``<account>`` or ``<account>:<user>``; only
        the account part is matched.

        Raises:
            Unauthorized: If the account is unknown or the key is wrong.
        """
        user = request.headers.get("x-auth-user", "")
        key = request.headers.get("x-auth-key", "")
        account_name = user.split(":", 1)[0]

        with self.store.lock:
            account = self.store.get_account(account_name)
            if account is None or account.password != key:
                logger.info("Rejected credentials for %r", user)
                raise Unauthorized()
            session = self.store.create_session(account.name)

        storage_url = f"{str(request.base_url).rstrip('/')}/v1/AUTH_{account.name}"
        return Response(
            status_code=200,
            headers={
                "X-Auth-Token": session.token,
                "X-Storage-Token": session.token,
                "X-Storage-Url": storage_url,
            },
        )

    def verify(self, request: Request) -> Session:
        """Return the session named by the request's ``X-Auth-Token``.

        Raises:
            Unauthorized: If the header is missing or names no session.
        """
        token = request.headers.get("x-auth-token") or request.headers.get("x-storage-token")
        if not token:
            raise Unauthorized()
        with self.store.lock:
            session = self.store.get_session(token)
        if session is None:
            raise Unauthorized()
        return session
