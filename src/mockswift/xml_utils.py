"""XML error body rendering for MockSwift."""

from xml.sax.saxutils import escape as _sax_escape

from fastapi.responses import Response


def _escape_xml(value: str) -> str:
    """Escape special XML characters in a string value."""
    return _sax_escape(str(value))


def render_error(
    code: str,
    message: str,
    resource: str = "",
    request_id: str = "",
) -> str:
    """Render an XML error response body.

    Args:
        code: The error code (e.g. "NoSuchContainer").
        message: Human-readable error message.
        resource: The request path that triggered the error.
        request_id: The transaction id of the request.

    Returns:
        An XML document with an ``Error`` root element.
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<Error>",
        f"<Code>{_escape_xml(code)}</Code>",
        f"<Message>{_escape_xml(message)}</Message>",
    ]
    if resource:
        parts.append(f"<Resource>{_escape_xml(resource)}</Resource>")
    if request_id:
        parts.append(f"<RequestId>{_escape_xml(request_id)}</RequestId>")
    parts.append("</Error>")
    return "\n".join(parts)


def xml_response(body: str, status: int = 200) -> Response:
    """Wrap an XML body string in a Response with content type application/xml."""
    return Response(
        content=body,
        status_code=status,
        media_type="application/xml",
    )
