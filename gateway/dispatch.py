"""
Per-request authentication and delegation.

Each request is classified exactly once, before its body is read or the store
is touched, as missing-token (400), invalid-token (401) or authenticated. Only
authenticated requests reach the application handler, together with the
device label and the store handle.
"""

import logging
from typing import Any, Callable

from werkzeug.wrappers import Request

from . import tokens
from .domain import RequestContext
from .exceptions import InvalidToken, MissingToken
from .services.devices import DeviceRegistry
from .services.store import MemoryStore

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext, str, MemoryStore], Any]


class Dispatcher(object):
    """Authenticates requests and passes them on to the application."""

    def __init__(self, registry: DeviceRegistry, store: MemoryStore,
                 handler: Handler) -> None:
        self.registry = registry
        self._store = store
        self._handler = handler

    def identify(self, request: Request) -> str:
        """
        Get the label of the device that made ``request``.

        Only the query string is inspected.

        Raises
        ------
        :class:`.MissingToken`
            If there is no ``token`` query parameter.
        :class:`.InvalidToken`
            If the token does not belong to a registered device.

        """
        token = request.args.get('token')
        if token is None:
            raise MissingToken()
        identity = tokens.authenticate(self.registry, token)
        if identity is None:
            raise InvalidToken()
        logger.info('Handling request for %r', identity)
        return identity

    def dispatch(self, context: RequestContext, identity: str) -> Any:
        """Return the handler's response for an authenticated request."""
        return self._handler(context, identity, self._store)
