"""
Web Server Gateway Interface entry-point.

For deployments where TLS is terminated by the WSGI server or a proxy. The
app is configured from ``os.environ`` (see :mod:`gateway.config`) on the
first request.
"""

import os
import threading

from gateway.factory import create_app

__flask_app__ = None
_lock = threading.Lock()


def application(environ, start_response):
    """WSGI application factory."""
    global __flask_app__
    if __flask_app__ is None:
        with _lock:
            if __flask_app__ is None:
                for key in ('DEVICES_FILE', 'STATIC_FILES', 'LOG_LEVEL',
                            'LOG_JSON', 'MAX_CONTENT_LENGTH'):
                    if key in environ:
                        os.environ[key] = str(environ[key])
                __flask_app__ = create_app()
    return __flask_app__(environ, start_response)
