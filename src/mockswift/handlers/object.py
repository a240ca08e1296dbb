"""Object-level Swift request handlers for MockSwift.

Implements:
    - GET /v1/AUTH_<account>/<container>/<object> with range, conditional
      request and dynamic large object (X-Object-Manifest) support
    - HEAD /v1/AUTH_<account>/<container>/<object>
    - PUT /v1/AUTH_<account>/<container>/<object>, including server-side
      copy through the X-Copy-From header
    - COPY /v1/AUTH_<account>/<container>/<object> with a Destination header
    - POST /v1/AUTH_<account>/<container>/<object> (replace custom metadata)
    - DELETE /v1/AUTH_<account>/<container>/<object>
"""

import email.utils
import hashlib
import logging
import re
import urllib.parse
from datetime import datetime

from fastapi import Request, Response

from mockswift.errors import (
    BadRequest,
    InvalidRange,
    NoSuchContainer,
    NoSuchKey,
    NoSuchVersion,
    PreconditionFailed,
    UnprocessableEntity,
)
from mockswift.handlers import BaseHandler
from mockswift.metadata import get_metadata, meta_prefix, set_metadata
from mockswift.models import Account, Metadata, ObjectResource, SwiftObject
from mockswift.validation import validate_object_name

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# ---------------------------------------------------------------------------
# Range requests
# ---------------------------------------------------------------------------

_RANGE_RE = re.compile(r"^bytes=(\d*)-(\d*)$")


def parse_range_header(header: str, total: int) -> tuple[int, int] | None:
    """Parse an HTTP Range header into (start, end) byte offsets.

    Supports three forms:
        - bytes=start-end  (both specified)
        - bytes=start-     (from start to end of object)
        - bytes=-suffix    (last N bytes)

    Args:
        header: The Range header value, e.g. "bytes=0-4".
        total: The total size of the object in bytes.

    Returns:
        A (start, end) tuple of inclusive byte offsets, or None if the
        header cannot be parsed or the object is empty (the full object is
        then returned).

    Raises:
        InvalidRange: If the parsed range is not satisfiable.
    """
    if not header or "," in header or total == 0:
        return None

    m = _RANGE_RE.match(header.strip())
    if not m:
        return None

    start_str, end_str = m.group(1), m.group(2)

    if not start_str and not end_str:
        raise InvalidRange()

    if not start_str:
        # bytes=-N: last N bytes
        suffix_length = int(end_str)
        if suffix_length == 0:
            raise InvalidRange()
        suffix_length = min(suffix_length, total)
        start = total - suffix_length
        end = total - 1
    elif not end_str:
        start = int(start_str)
        if start >= total:
            raise InvalidRange()
        end = total - 1
    else:
        start = int(start_str)
        end = int(end_str)
        if start > end or start >= total:
            raise InvalidRange()
        end = min(end, total - 1)

    return (start, end)


# ---------------------------------------------------------------------------
# Conditional request evaluation
# ---------------------------------------------------------------------------


def _strip_etag_quotes(etag: str) -> str:
    """Strip surrounding double quotes and an optional W/ prefix from an ETag."""
    etag = etag.strip()
    if etag.startswith("W/"):
        etag = etag[2:]
    if etag.startswith('"') and etag.endswith('"'):
        etag = etag[1:-1]
    return etag


def _parse_http_date(date_str: str) -> datetime | None:
    try:
        return email.utils.parsedate_to_datetime(date_str)
    except (ValueError, TypeError):
        return None


def evaluate_conditionals(request: Request, etag: str, last_modified: datetime) -> int | None:
    """Evaluate conditional GET/HEAD headers against an object.

    Evaluation order:
        1. If-Match -> 412 on mismatch
        2. If-Unmodified-Since -> 412 if modified after date
        3. If-None-Match -> 304 on match
        4. If-Modified-Since -> 304 if not modified

    Args:
        request: The incoming HTTP request.
        etag: The object's ETag, quoted or not.
        last_modified: The object's last-modified time (UTC).

    Returns:
        304 or 412 if a condition fails, None if all pass.
    """
    obj_etag = _strip_etag_quotes(etag)
    # HTTP dates carry whole seconds only
    obj_mtime = last_modified.replace(microsecond=0)

    if_match = request.headers.get("if-match")
    if if_match is not None and if_match.strip() != "*":
        if obj_etag not in [_strip_etag_quotes(t) for t in if_match.split(",")]:
            return 412

    if_unmodified_since = request.headers.get("if-unmodified-since")
    if if_unmodified_since is not None and if_match is None:
        ius_date = _parse_http_date(if_unmodified_since)
        if ius_date is not None and obj_mtime > ius_date:
            return 412

    if_none_match = request.headers.get("if-none-match")
    if if_none_match is not None:
        if if_none_match.strip() == "*":
            return 304
        if obj_etag in [_strip_etag_quotes(t) for t in if_none_match.split(",")]:
            return 304

    if_modified_since = request.headers.get("if-modified-since")
    if if_modified_since is not None and if_none_match is None:
        ims_date = _parse_http_date(if_modified_since)
        if ims_date is not None and obj_mtime <= ims_date:
            return 304

    return None


def _split_object_path(value: str, header: str) -> tuple[str, str]:
    """Split a URL-quoted ``/<container>/<object>`` (leading slash optional)."""
    parts = urllib.parse.unquote(value).lstrip("/").split("/", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise BadRequest(f"{header} header must be of the form <container name>/<object name>")
    return parts[0], parts[1]


class ObjectHandler(BaseHandler):
    """Handles requests addressed to an object."""

    # -- Helpers --------------------------------------------------------------

    def _require_object(self, resource: ObjectResource) -> SwiftObject:
        """Return the addressed object, honoring a requested version.

        Raises:
            NoSuchKey: If the object does not exist.
            NoSuchVersion: If ``versionId`` names another version.
        """
        obj = resource.object
        if obj is None:
            raise NoSuchKey()
        if resource.version and resource.version != obj.version_id:
            raise NoSuchVersion()
        return obj

    def _lookup(self, account: Account, container_name: str, object_name: str) -> SwiftObject:
        container = self.store.get_container(account, container_name)
        if container is None:
            raise NoSuchContainer()
        obj = self.store.get_object(container, object_name)
        if obj is None:
            raise NoSuchKey()
        return obj

    def _content(self, account: Account, obj: SwiftObject) -> tuple[bytes, str]:
        """Return (body, etag) for an object.

        A manifest object (``X-Object-Manifest: <container>/<prefix>``) is
        served as the concatenation of its segments in listing order; its
        ETag is the quoted MD5 of the concatenated segment ETags.
        """
        manifest = obj.meta.get("X-Object-Manifest")
        if manifest is None:
            return obj.data, obj.etag

        container_name, _, prefix = manifest.lstrip("/").partition("/")
        container = self.store.get_container(account, container_name)
        segments = []
        if container is not None:
            segments = [
                o for o in self.store.ordered_objects(container) if o.name.startswith(prefix)
            ]
        data = b"".join(seg.data for seg in segments)
        etag = hashlib.md5("".join(seg.etag for seg in segments).encode()).hexdigest()
        return data, f'"{etag}"'

    def _read(self, request: Request, resource: ObjectResource, include_body: bool) -> Response:
        obj = self._require_object(resource)
        data, etag = self._content(resource.account, obj)
        last_modified = email.utils.format_datetime(obj.last_modified, usegmt=True)

        cond_status = evaluate_conditionals(request, etag, obj.last_modified)
        if cond_status == 304:
            return Response(
                status_code=304,
                headers={"ETag": etag, "Last-Modified": last_modified},
            )
        if cond_status == 412:
            raise PreconditionFailed()

        headers = {
            "ETag": etag,
            "Last-Modified": last_modified,
            "Accept-Ranges": "bytes",
            "X-Object-Version-Id": obj.version_id,
            "Content-Type": obj.meta.get("Content-Type") or DEFAULT_CONTENT_TYPE,
        }
        status = 200
        range_header = request.headers.get("range")
        if range_header:
            parsed = parse_range_header(range_header, len(data))
            if parsed is not None:
                start, end = parsed
                headers["Content-Range"] = f"bytes {start}-{end}/{len(data)}"
                data = data[start : end + 1]
                status = 206

        if include_body:
            response = Response(content=data, status_code=status, headers=headers)
        else:
            headers["Content-Length"] = str(len(data))
            response = Response(status_code=status, headers=headers)
        get_metadata(obj.meta, response.headers)
        return response

    def _store(
        self,
        request: Request,
        account: Account,
        container_name: str,
        name: str,
        data: bytes,
        meta: Metadata,
    ) -> Response:
        """Overlay request metadata on ``meta`` and write the object."""
        container = self.store.get_container(account, container_name)
        if container is None:
            raise NoSuchContainer()
        set_metadata(meta, "object", request.headers.items(), system_headers=self.system_headers)
        obj = self.store.put_object(container, name, data, meta)
        logger.debug(
            "Stored %s/%s/%s (%d bytes)", account.name, container_name, name, obj.size
        )
        return Response(
            status_code=201,
            headers={
                "ETag": obj.etag,
                "Last-Modified": email.utils.format_datetime(obj.last_modified, usegmt=True),
                "X-Object-Version-Id": obj.version_id,
            },
        )

    # -- Verbs ------------------------------------------------------------------

    def get(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        return self._read(request, resource, include_body=True)

    def head(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        return self._read(request, resource, include_body=False)

    def put(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        """Create or replace an object.

        With ``X-Copy-From`` the data and metadata come from the source
        object; otherwise the request body is stored. The new object's
        metadata is built from scratch, so headers of a replaced object do
        not survive.

        Raises:
            UnprocessableEntity: If an ``ETag`` header does not match the data.
        """
        validate_object_name(resource.name)

        copy_from = request.headers.get("x-copy-from")
        if copy_from:
            src_container, src_name = _split_object_path(copy_from, "X-Copy-From")
            source = self._lookup(resource.account, src_container, src_name)
            data = source.data
            meta = source.meta.copy()
        else:
            data = body
            meta = Metadata()

        expected = request.headers.get("etag")
        if expected:
            actual = hashlib.md5(data).hexdigest()
            if _strip_etag_quotes(expected).lower() != actual:
                raise UnprocessableEntity()

        return self._store(request, resource.account, resource.container.name, resource.name, data, meta)

    def copy(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        """Copy this object to the ``Destination`` header's location."""
        obj = self._require_object(resource)
        destination = request.headers.get("destination")
        if not destination:
            raise BadRequest("Destination header required")
        dest_container, dest_name = _split_object_path(destination, "Destination")
        validate_object_name(dest_name)
        return self._store(request, resource.account, dest_container, dest_name, obj.data, obj.meta.copy())

    def post(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        """Replace the object's custom metadata with the request's."""
        obj = self._require_object(resource)
        prefix = meta_prefix("object")
        for name in [n for n in obj.meta if n.startswith(prefix)]:
            obj.meta.delete(name)
        set_metadata(obj.meta, "object", request.headers.items(), system_headers=self.system_headers)
        return Response(status_code=202)

    def delete(self, request: Request, resource: ObjectResource, body: bytes) -> Response:
        obj = self._require_object(resource)
        self.store.delete_object(resource.container, obj.name)
        return Response(status_code=204)
