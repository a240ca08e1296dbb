"""Container-level Swift request handlers for MockSwift.

Implements:
    - GET /v1/AUTH_<account>/<container>     (list objects)
    - HEAD /v1/AUTH_<account>/<container>    (container stats and metadata)
    - PUT /v1/AUTH_<account>/<container>     (create, or update metadata)
    - POST /v1/AUTH_<account>/<container>    (update metadata)
    - DELETE /v1/AUTH_<account>/<container>  (delete an empty container)

The resolver hands over a ContainerResource whose ``container`` may be None;
every verb except PUT treats that as NoSuchContainer.
"""

import logging

from fastapi import Request, Response

from mockswift.errors import ContainerNotEmpty, NoSuchContainer
from mockswift.handlers import BaseHandler, listing_response
from mockswift.metadata import get_metadata, set_metadata
from mockswift.models import Container, ContainerResource
from mockswift.validation import validate_container_name

logger = logging.getLogger(__name__)


def _require_container(resource: ContainerResource) -> Container:
    if resource.container is None:
        raise NoSuchContainer()
    return resource.container


def _container_headers(container: Container) -> dict[str, str]:
    return {
        "X-Container-Object-Count": str(len(container.objects)),
        "X-Container-Bytes-Used": str(container.bytes_used),
    }


class ContainerHandler(BaseHandler):
    """Handles requests addressed to a container."""

    def get(self, request: Request, resource: ContainerResource, body: bytes) -> Response:
        """List the container's objects in name order."""
        container = _require_container(resource)
        names = [o.name for o in self.store.ordered_objects(container)]
        response = listing_response(request, names, _container_headers(container))
        get_metadata(container.meta, response.headers)
        return response

    def head(self, request: Request, resource: ContainerResource, body: bytes) -> Response:
        container = _require_container(resource)
        response = Response(status_code=204, headers=_container_headers(container))
        get_metadata(container.meta, response.headers)
        return response

    def put(self, request: Request, resource: ContainerResource, body: bytes) -> Response:
        """Create the container, or update its metadata if it already exists.

        Returns:
            201 Created for a new container, 202 Accepted otherwise.
        """
        validate_container_name(resource.name)

        container = resource.container
        status = 202
        if container is None:
            container = self.store.create_container(resource.account, resource.name)
            logger.debug("Created container %s/%s", resource.account.name, resource.name)
            status = 201

        set_metadata(
            container.meta,
            "container",
            request.headers.items(),
            system_headers=self.system_headers,
        )
        return Response(status_code=status)

    def post(self, request: Request, resource: ContainerResource, body: bytes) -> Response:
        container = _require_container(resource)
        set_metadata(
            container.meta,
            "container",
            request.headers.items(),
            system_headers=self.system_headers,
        )
        return Response(status_code=204)

    def delete(self, request: Request, resource: ContainerResource, body: bytes) -> Response:
        """Delete the container.

        Raises:
            NoSuchContainer: If it does not exist.
            ContainerNotEmpty: If it still holds objects.
        """
        container = _require_container(resource)
        if container.objects:
            raise ContainerNotEmpty()
        self.store.delete_container(resource.account, container.name)
        logger.debug("Deleted container %s/%s", resource.account.name, container.name)
        return Response(status_code=204)
