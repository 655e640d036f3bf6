"""Route every request through the authenticating dispatcher."""

from typing import Any

from flask import Blueprint, current_app, g, request

from .domain import RequestContext

blueprint = Blueprint('gateway', __name__, url_prefix='')

METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS']


@blueprint.before_app_request
def authenticate() -> None:
    """
    Classify every request before anything else happens to it.

    Flask runs this before it raises routing errors, so a request with a
    missing or invalid token gets 400 or 401 whatever its method or path.
    The request body has not been read at this point.
    """
    g.identity = current_app.extensions['gateway'].identify(request)


@blueprint.route('/', defaults={'path': ''}, methods=METHODS,
                 provide_automatic_options=False)
@blueprint.route('/<path:path>', methods=METHODS,
                 provide_automatic_options=False)
def dispatch(path: str) -> Any:
    """Hand an authenticated request to the application."""
    dispatcher = current_app.extensions['gateway']
    context = RequestContext(
        request=request._get_current_object(),
        body=request.get_data(),
        conn_id=_connection_id()
    )
    return dispatcher.dispatch(context, g.identity)


def _connection_id() -> str:
    port = request.environ.get('REMOTE_PORT', '-')
    return f'{request.remote_addr}:{port}'
