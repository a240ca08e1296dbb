"""Account-level Swift request handlers for MockSwift.

Implements:
    - GET /v1/AUTH_<account>   (list containers)
    - HEAD /v1/AUTH_<account>  (account stats and metadata)
    - POST /v1/AUTH_<account>  (update account metadata)
"""

from fastapi import Request, Response

from mockswift.handlers import BaseHandler, listing_response
from mockswift.metadata import get_metadata, set_metadata
from mockswift.models import Account, RootResource


class AccountHandler(BaseHandler):
    """Handles requests addressed to an account root."""

    def _account_headers(self, account: Account) -> dict[str, str]:
        containers, objects, bytes_used = self.store.account_totals(account)
        return {
            "X-Account-Container-Count": str(containers),
            "X-Account-Object-Count": str(objects),
            "X-Account-Bytes-Used": str(bytes_used),
        }

    def get(self, request: Request, resource: RootResource, body: bytes) -> Response:
        """List the account's containers in name order."""
        account = resource.account
        names = [c.name for c in self.store.ordered_containers(account)]
        response = listing_response(request, names, self._account_headers(account))
        get_metadata(account.meta, response.headers)
        return response

    def head(self, request: Request, resource: RootResource, body: bytes) -> Response:
        response = Response(status_code=204, headers=self._account_headers(resource.account))
        get_metadata(resource.account.meta, response.headers)
        return response

    def post(self, request: Request, resource: RootResource, body: bytes) -> Response:
        set_metadata(
            resource.account.meta,
            "account",
            request.headers.items(),
            system_headers=self.system_headers,
        )
        return Response(status_code=204)
