"""Swift input validation helpers for MockSwift.

Each function raises an appropriate ``SwiftError`` subclass on invalid input.
"""

from mockswift.errors import BadRequest, PreconditionFailed
from mockswift.listing import DEFAULT_LIMIT

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Swift's default constraints (swift.common.constraints)
MAX_CONTAINER_NAME_LENGTH = 256
MAX_OBJECT_NAME_LENGTH = 1024


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_container_name(name: str) -> None:
    """Validate a container name.

    Slashes cannot occur here since the path parser stops a container
    segment at the first one.

    Raises:
        BadRequest: If the name exceeds 256 bytes when UTF-8 encoded.
    """
    if len(name.encode("utf-8")) > MAX_CONTAINER_NAME_LENGTH:
        raise BadRequest(f"Container name length of {len(name)} longer than {MAX_CONTAINER_NAME_LENGTH}")


def validate_object_name(name: str) -> None:
    """Validate an object name.

    Raises:
        BadRequest: If the name exceeds 1024 bytes when UTF-8 encoded.
    """
    if len(name.encode("utf-8")) > MAX_OBJECT_NAME_LENGTH:
        raise BadRequest(f"Object name length of {len(name)} longer than {MAX_OBJECT_NAME_LENGTH}")


def validate_limit(value: str | None) -> int:
    """Validate and parse the ``limit`` listing query parameter.

    Args:
        value: The raw string value from the query string, or None.

    Returns:
        An integer in the range [0, 10000]; 10000 when ``value`` is None.

    Raises:
        BadRequest: If the value is not an integer.
        PreconditionFailed: If the value is out of range.
    """
    if value is None or value == "":
        return DEFAULT_LIMIT
    try:
        n = int(value)
    except (ValueError, TypeError):
        raise BadRequest(f"Value of limit must be an integer, got {value!r}")

    if n < 0 or n > DEFAULT_LIMIT:
        raise PreconditionFailed(f"Maximum limit is {DEFAULT_LIMIT}")

    return n
