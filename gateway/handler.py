"""
Application handler for authenticated requests.

Serves the static client and a small JSON/text API over the document store.
Nothing in this module is reachable without a valid device token: it is only
ever called by :class:`gateway.dispatch.Dispatcher`.
"""

import logging
import os
from typing import Any

from flask import Response, current_app, jsonify, make_response, \
    send_from_directory
from werkzeug.exceptions import BadRequest, NotFound
from werkzeug.routing import Map, Rule

from .domain import RequestContext
from .services.store import MemoryStore

logger = logging.getLogger(__name__)

url_map = Map([
    Rule('/api/head', endpoint='head', methods=['GET']),
    Rule('/api/tree', endpoint='tree', methods=['GET']),
    Rule('/api/history', endpoint='history', methods=['GET']),
    Rule('/api/contents/<path:path>', endpoint='read', methods=['GET']),
    Rule('/api/contents/<path:path>', endpoint='write', methods=['PUT']),
    Rule('/api/contents/<path:path>', endpoint='remove', methods=['DELETE']),
    Rule('/', endpoint='index', methods=['GET']),
    Rule('/<path:filename>', endpoint='static', methods=['GET']),
])


def handle_request(context: RequestContext, identity: str,
                   store: MemoryStore) -> Any:
    """Route an authenticated request to the matching view."""
    adapter = url_map.bind_to_environ(context.request.environ)
    endpoint, values = adapter.match()
    view = VIEWS[endpoint]
    return view(context, identity, store, **values)


def head(context: RequestContext, identity: str,
         store: MemoryStore) -> Response:
    """Get the most recent commit."""
    commit = store.head()
    return jsonify(commit.to_dict() if commit is not None else None)


def tree(context: RequestContext, identity: str,
         store: MemoryStore) -> Response:
    """List the documents in the store."""
    prefix = context.request.args.get('prefix', '')
    return jsonify(store.list(prefix))


def history(context: RequestContext, identity: str,
            store: MemoryStore) -> Response:
    """List commits, newest first."""
    limit = context.request.args.get('limit')
    if limit is not None:
        try:
            limit = int(limit)
        except ValueError as e:
            raise BadRequest('limit must be an integer') from e
        if limit < 0:
            raise BadRequest('limit must not be negative')
    return jsonify([commit.to_dict() for commit in store.history(limit)])


def read(context: RequestContext, identity: str, store: MemoryStore,
         path: str) -> Response:
    """Get the content of a document."""
    content = store.read(path)
    if content is None:
        raise NotFound(f'No such document: {path}')
    response = make_response(content)
    response.mimetype = 'text/plain'
    return response


def write(context: RequestContext, identity: str, store: MemoryStore,
          path: str) -> Response:
    """Replace the content of a document with the request body."""
    try:
        content = context.body.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadRequest('Content must be UTF-8') from e
    message = context.request.args.get('message', f'Update {path}')
    commit = store.write(path, content, author=identity, message=message)
    logger.debug('%s wrote %s in %s', identity, path, commit.commit_id)
    return jsonify(commit.to_dict())


def remove(context: RequestContext, identity: str, store: MemoryStore,
           path: str) -> Response:
    """Delete a document."""
    message = context.request.args.get('message', f'Delete {path}')
    try:
        commit = store.remove(path, author=identity, message=message)
    except KeyError as e:
        raise NotFound(f'No such document: {path}') from e
    return jsonify(commit.to_dict())


def index(context: RequestContext, identity: str,
          store: MemoryStore) -> Response:
    return static(context, identity, store, 'index.html')


def static(context: RequestContext, identity: str, store: MemoryStore,
           filename: str) -> Response:
    """Serve a file from the static client directory."""
    directory = os.path.abspath(current_app.config['STATIC_FILES'])
    return send_from_directory(directory, filename)


VIEWS = {
    'head': head,
    'tree': tree,
    'history': history,
    'read': read,
    'write': write,
    'remove': remove,
    'index': index,
    'static': static,
}
