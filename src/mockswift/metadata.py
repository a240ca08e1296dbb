"""Translation between HTTP headers and persisted resource metadata.

Two kinds of headers are persisted on an account, container or object:

* system headers, a fixed recognized set (``Content-Type`` and friends);
* custom headers carrying the resource type prefix, e.g.
  ``X-Container-Meta-Color`` on a container.

Everything else a client sends is ignored here. An empty value deletes an
existing account or container entry, but is stored as-is on objects.
"""

import re
from collections.abc import Iterable, MutableMapping

from mockswift.models import Metadata

DEFAULT_SYSTEM_HEADERS: frozenset[str] = frozenset(
    {
        "Content-Type",
        "Content-Encoding",
        "Content-Disposition",
        "X-Object-Manifest",
    }
)

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def canonical_header_key(name: str) -> str:
    """Canonicalize a header name: ``x-object-meta-foo`` -> ``X-Object-Meta-Foo``.

    Names containing characters outside the HTTP token set are returned
    unchanged.
    """
    if not _TOKEN_RE.match(name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def meta_prefix(resource: str) -> str:
    """Custom metadata prefix for a resource type, e.g. ``X-Container-Meta-``."""
    return f"X-{resource.title()}-Meta-"


def group_headers(headers: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group raw (name, value) pairs by canonical name, keeping arrival order."""
    grouped: dict[str, list[str]] = {}
    for name, value in headers:
        grouped.setdefault(canonical_header_key(name), []).append(value)
    return grouped


def set_metadata(
    meta: Metadata,
    resource: str,
    headers: Iterable[tuple[str, str]],
    system_headers: Iterable[str] = DEFAULT_SYSTEM_HEADERS,
    prefix: str | None = None,
) -> None:
    """Merge request headers into a resource's metadata.

    Args:
        meta: The metadata set to update in place.
        resource: Resource type: "account", "container" or "object".
        headers: Request header (name, value) pairs; repeated names are
            allowed and kept as multiple values.
        system_headers: Canonical names always persisted.
        prefix: Custom metadata prefix; derived from ``resource`` if omitted.
    """
    if prefix is None:
        prefix = meta_prefix(resource)
    system = set(system_headers)
    for key, values in group_headers(headers).items():
        if key not in system and not key.startswith(prefix):
            continue
        if values[0] != "" or resource == "object":
            meta.set(key, values)
        else:
            meta.delete(key)


def get_metadata(meta: Metadata, headers: MutableMapping[str, str]) -> None:
    """Copy every stored metadata entry into response headers.

    ``headers`` is typically a Starlette ``MutableHeaders``, where
    multi-valued entries are appended one value at a time. A plain mapping
    only receives the first value.
    """
    multi = hasattr(headers, "append")
    for name, values in meta.items():
        if name in headers:
            del headers[name]
        if not multi:
            headers[name] = values[0]
            continue
        for value in values:
            headers.append(name, value)
