"""Helpers for gateway tests."""

import os
import tempfile
from contextlib import contextmanager
from typing import Generator

from gateway.domain import Device
from gateway.services import DeviceRegistry

SECRET = 'secret123'
SECRET_DIGEST = \
    'fcf730b6d95236ecd3c9fc2d92d7b6b2bb061514961aec041d6c7a7192f592e4'
WRONG = 'wrong'
WRONG_DIGEST = \
    '8810ad581e59f2bc3928b261707a71308f7e139eb04820366dc4d5c18d980225'
PHONE_TOKEN = 'phone-token'
PHONE_DIGEST = \
    '23e75836958c39646ed9d9142e57270f5bc6004636b403d47f9e48a7d178a18c'


def registry() -> DeviceRegistry:
    """A registry with a laptop and a phone."""
    return DeviceRegistry([Device(SECRET_DIGEST, 'laptop'),
                           Device(PHONE_DIGEST, 'phone')])


@contextmanager
def device_file(content: str) -> Generator[str, None, None]:
    """Write ``content`` to a temporary device file and yield its path."""
    fd, path = tempfile.mkstemp(suffix='.devices')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        yield path
    finally:
        os.remove(path)
