"""Request path parsing for the Swift API."""

import re
from typing import NamedTuple

from mockswift.errors import InvalidURI

# /v1/AUTH_<account>[/<container>[/<object path>]]
# The object group is taken verbatim and may itself contain slashes.
_PATH_RE = re.compile(r"/v1/AUTH_([a-zA-Z0-9]+)(/([^/]+)(/(.*))?)?")


class ParsedPath(NamedTuple):
    """Identifiers extracted from a request path.

    Missing segments are empty strings.
    """

    account: str
    container: str
    object: str


def parse_path(path: str) -> ParsedPath:
    """Split a Swift request path into (account, container, object).

    Args:
        path: The (already percent-decoded) request path.

    Returns:
        The parsed identifiers.

    Raises:
        InvalidURI: If the path does not start with ``/v1/AUTH_<account>``.
    """
    m = _PATH_RE.match(path)
    if m is None:
        raise InvalidURI()
    return ParsedPath(
        account=m.group(1),
        container=m.group(3) or "",
        object=m.group(5) or "",
    )
