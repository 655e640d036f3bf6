"""
TLS listener for the gateway.

The certificate and key are loaded, and the port bound, before anything is
logged or served; any failure raises a :class:`.ConfigurationError` and leaves
no listener behind.
"""

import logging
import re
from typing import Any

from flask import Flask
from werkzeug.serving import WSGIRequestHandler, load_ssl_context, \
    make_server

from .exceptions import CredentialsUnavailable, PortUnavailable

logger = logging.getLogger(__name__)

PORT = 8443

TOKEN_PARAM = re.compile(r'(?<=[?&])token=[^&\s"]*')


def redact(line: str) -> str:
    """Replace the value of any ``token`` query parameter in ``line``."""
    return TOKEN_PARAM.sub('token=<redacted>', line)


class RedactingRequestHandler(WSGIRequestHandler):
    """Request handler whose access log never contains access tokens."""

    def log(self, type: str, message: str, *args: Any) -> None:
        super().log(type, '%s', redact(message % args if args else message))


def start(cert_path: str, key_path: str, app: Flask, port: int = PORT,
          host: str = '0.0.0.0', public_host: str = '127.0.0.1') -> None:
    """
    Serve ``app`` over HTTPS until the process is stopped.

    Connections are handled on separate threads.

    Raises
    ------
    :class:`.CredentialsUnavailable`
        If the certificate or key is missing, unreadable or malformed.
    :class:`.PortUnavailable`
        If ``host:port`` cannot be bound.

    """
    try:
        ssl_context = load_ssl_context(cert_path, key_path)
    except OSError as e:    # Includes ssl.SSLError.
        raise CredentialsUnavailable(
            f'Cannot load TLS credentials {cert_path} and {key_path}: {e}'
        ) from e

    try:
        server = make_server(host, port, app, threaded=True,
                             request_handler=RedactingRequestHandler,
                             ssl_context=ssl_context)
    except OSError as e:
        raise PortUnavailable(f'Cannot listen on {host}:{port}: {e}') from e
    except SystemExit as e:
        # werkzeug reports bind failures on stderr and exits.
        raise PortUnavailable(f'Cannot listen on {host}:{port}') from e

    logger.info('Server available at https://%s:%i', public_host, port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
