"""Provides an app factory for the gateway."""

from typing import Any, Optional

from flask import Flask
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers import Response

from . import routes
from .app_logging import setup_logger
from .dispatch import Dispatcher, Handler
from .exceptions import ConfigurationError
from .handler import handle_request
from .services import DeviceRegistry, MemoryStore


def plaintext_exception(error: HTTPException) -> Response:
    """Render an HTTP error with its description as the literal body."""
    response = error.get_response()
    if error.description is not None:
        response.set_data(error.description)
        response.mimetype = 'text/plain'
    return response


def create_app(registry: Optional[DeviceRegistry] = None,
               store: Optional[MemoryStore] = None,
               handler: Optional[Handler] = None,
               **config: Any) -> Flask:
    """
    Initialize an instance of the gateway.

    Parameters
    ----------
    registry : :class:`.DeviceRegistry`
        Authorized devices. If not given, the registry is loaded from the
        ``DEVICES_FILE`` config value.
    store : :class:`.MemoryStore`
        Store handed to authenticated requests. A new, empty store is used if
        not given.
    handler : callable
        Application handler for authenticated requests; defaults to
        :func:`gateway.handler.handle_request`.
    config : kwargs
        Overrides for values in :mod:`gateway.config`.

    """
    app = Flask('gateway', static_folder=None)
    try:
        app.config.from_pyfile('config.py')
    except ValueError as e:
        raise ConfigurationError(f'Invalid configuration: {e}') from e
    app.config.update(config)
    setup_logger(app.config['LOG_LEVEL'], app.config['LOG_JSON'])

    if registry is None:
        devices_file = app.config.get('DEVICES_FILE')
        if not devices_file:
            raise ConfigurationError('DEVICES_FILE is not set')
        registry = DeviceRegistry.load(devices_file)
    if store is None:
        store = MemoryStore()
    if handler is None:
        handler = handle_request
    app.extensions['gateway'] = Dispatcher(registry, store, handler)

    app.register_blueprint(routes.blueprint)
    app.errorhandler(HTTPException)(plaintext_exception)
    return app
