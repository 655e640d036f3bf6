"""Core concepts for the authentication gateway."""

from typing import NamedTuple

from werkzeug.wrappers import Request


class Device(NamedTuple):
    """An authorized client device."""

    digest: str
    """Lowercase hex SHA-256 digest of the device's access token."""

    label: str
    """Human-readable name, used as the identity of authenticated requests."""


class RequestContext(NamedTuple):
    """Everything the gateway knows about a single authenticated request."""

    request: Request
    """The incoming request; its query string still holds the token."""

    body: bytes
    """Request body, read only after the request was authenticated."""

    conn_id: str
    """Identifies the client connection (``host:port``)."""
