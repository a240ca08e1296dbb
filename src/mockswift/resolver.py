"""Resolution of a request path into a resource variant.

Container absence is not an error at this layer unless an
object is addressed beneath it: PUT on a container is legal when it does not
exist yet, GET/HEAD/DELETE/POST are not, and only the verb handler knows
which case applies. Object absence is likewise left to the handlers.
"""

from collections.abc import Mapping

from mockswift.errors import NoSuchAccount, NoSuchContainer
from mockswift.models import ContainerResource, ObjectResource, Resource, RootResource
from mockswift.paths import parse_path
from mockswift.storage import SwiftStore


def resolve(store: SwiftStore, path: str, query: Mapping[str, str] | None = None) -> Resource:
    """Map a request path onto the current store state.

    The caller must hold ``store.lock``.

    Args:
        store: The in-memory store.
        path: The request path, e.g. ``/v1/AUTH_test/photos/cat.jpg``.
        query: Request query parameters; ``versionId`` selects an object
            version.

    Returns:
        A RootResource, ContainerResource or ObjectResource.

    Raises:
        InvalidURI: If the path cannot be parsed.
        NoSuchAccount: If the account does not exist.
        NoSuchContainer: If an object is addressed in a missing container.
    """
    parsed = parse_path(path)

    account = store.get_account(parsed.account)
    if account is None:
        raise NoSuchAccount()

    if not parsed.container:
        return RootResource(account=account)

    container_resource = ContainerResource(
        account=account,
        name=parsed.container,
        container=store.get_container(account, parsed.container),
    )
    if not parsed.object:
        return container_resource

    container = container_resource.container
    if container is None:
        raise NoSuchContainer()

    version = (query or {}).get("versionId", "") or ""
    return ObjectResource(
        account=account,
        container=container,
        name=parsed.object,
        version=version,
        object=store.get_object(container, parsed.object),
    )
