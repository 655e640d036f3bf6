"""Flask configuration for the gateway."""

import os

DEVICES_FILE = os.environ.get('DEVICES_FILE')
"""Path of the device file; one ``<sha256-hex> <label>`` per line."""

STATIC_FILES = os.environ.get('STATIC_FILES', '_build/static')
"""Directory with the JavaScript client and its resources."""

MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', '16777216'))
"""Largest request body, in bytes, accepted from an authenticated device."""

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_JSON = os.environ.get('LOG_JSON', '0') == '1'
