"""Data model types for the MockSwift in-memory store.

These dataclasses represent the entities held by the store (accounts,
containers, objects, sessions) and the per-request resource variants the
resolver hands to the verb handlers.
"""

from __future__ import annotations

import hashlib
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Metadata:
    """Ordered mapping of canonical header name to a list of values.

    Only the metadata manager decides what goes in here; this class is a
    plain multi-valued dict with insertion order preserved.
    """

    def __init__(self, entries: dict[str, list[str]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {}
        if entries:
            for name, values in entries.items():
                self._entries[name] = list(values)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Metadata({self._entries!r})"

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value stored for ``name``."""
        values = self._entries.get(name)
        if not values:
            return default
        return values[0]

    def getlist(self, name: str) -> list[str]:
        return list(self._entries.get(name, []))

    def set(self, name: str, values: list[str]) -> None:
        self._entries[name] = list(values)

    def delete(self, name: str) -> None:
        self._entries.pop(name, None)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(name, list(values)) for name, values in self._entries.items()]

    def copy(self) -> Metadata:
        return Metadata(self._entries)


@dataclass
class SwiftObject:
    """A stored object.

    Attributes:
        name: Object name, unique within its container. May contain slashes.
        data: Object content, opaque to the store.
        meta: Persisted system and custom headers.
        etag: Lowercase MD5 hex digest of ``data``.
        last_modified: UTC timestamp of the last put.
        version_id: Opaque token regenerated on every put.
    """

    name: str
    data: bytes = b""
    meta: Metadata = field(default_factory=Metadata)
    etag: str = ""
    last_modified: datetime = field(default_factory=_now)
    version_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not self.etag:
            self.etag = hashlib.md5(self.data).hexdigest()

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Container:
    """A named collection of objects within one account."""

    name: str
    objects: dict[str, SwiftObject] = field(default_factory=dict)
    meta: Metadata = field(default_factory=Metadata)

    @property
    def bytes_used(self) -> int:
        return sum(obj.size for obj in self.objects.values())


@dataclass
class Account:
    """Top-level namespace owning containers.

    Attributes:
        name: Account name as it appears after ``AUTH_`` in paths.
        password: Opaque credential checked by the auth endpoint.
        containers: Container name -> Container.
        meta: Persisted account headers.
    """

    name: str
    password: str = ""
    containers: dict[str, Container] = field(default_factory=dict)
    meta: Metadata = field(default_factory=Metadata)


@dataclass
class Session:
    """An issued auth token bound to an account name."""

    token: str
    username: str


# ---------------------------------------------------------------------------
# Resource variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RootResource:
    """Account-level request target (no container segment)."""

    account: Account


@dataclass(frozen=True)
class ContainerResource:
    """Container-level request target.

    ``container`` is None when no container of that name exists yet.
    """

    account: Account
    name: str
    container: Container | None


@dataclass(frozen=True)
class ObjectResource:
    """Object-level request target.

    The container always exists; ``object`` is None when no object of that
    name exists yet. ``version`` is the requested version token or "".
    """

    account: Account
    container: Container
    name: str
    version: str = ""
    object: SwiftObject | None = None


Resource = Union[RootResource, ContainerResource, ObjectResource]
