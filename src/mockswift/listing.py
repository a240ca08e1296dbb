"""Deterministic listing order and Swift listing filters.

Containers and objects live in plain dicts; enumeration responses go
through :func:`ordered` so clients always see names in ascending code point
order regardless of insertion order.
"""

from collections.abc import Iterable
from operator import attrgetter
from typing import Protocol, TypeVar


class _Named(Protocol):
    name: str


N = TypeVar("N", bound=_Named)

DEFAULT_LIMIT = 10000


def ordered(entries: Iterable[N]) -> list[N]:
    """Return ``entries`` as a new list sorted by name (case-sensitive)."""
    return sorted(entries, key=attrgetter("name"))


def filter_listing(
    names: Iterable[str],
    prefix: str = "",
    delimiter: str = "",
    marker: str = "",
    end_marker: str = "",
    limit: int = DEFAULT_LIMIT,
) -> list[str]:
    """Apply Swift listing query parameters to an ordered list of names.

    Args:
        names: Names in listing order.
        prefix: Only names starting with this string are listed.
        delimiter: When set, names containing the delimiter after the prefix
            are rolled up into a single ``<prefix><part><delimiter>`` entry.
        marker: Only names strictly greater than this are listed.
        end_marker: Only names strictly less than this are listed.
        limit: Maximum number of entries returned.

    Returns:
        The listing entries, in order.
    """
    result: list[str] = []
    for name in names:
        if len(result) >= limit:
            break
        if marker and name <= marker:
            continue
        if end_marker and name >= end_marker:
            break
        if not name.startswith(prefix):
            continue
        if delimiter:
            idx = name.find(delimiter, len(prefix))
            if idx >= 0:
                subdir = name[: idx + len(delimiter)]
                if result and result[-1] == subdir:
                    continue
                if marker and subdir <= marker:
                    continue
                result.append(subdir)
                continue
        result.append(name)
    return result
