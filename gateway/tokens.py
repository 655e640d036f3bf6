"""
Authenticate device access tokens.

Tokens are long-lived device credentials, so they are hashed with plain
SHA-256 (no salt, no per-use nonce); the same token always has the same
digest, and the digest is what the device file stores.
"""

import hashlib
import logging
from typing import Optional

from .services.devices import DeviceRegistry

logger = logging.getLogger(__name__)

HASH_ALGORITHM = 'sha256'
DIGEST_LENGTH = 64
"""Number of hex characters in a digest."""


def digest(token: str) -> str:
    """Compute the lowercase hex digest of ``token``."""
    return hashlib.new(HASH_ALGORITHM, token.encode('utf-8')).hexdigest()


def authenticate(registry: DeviceRegistry, token: str) -> Optional[str]:
    """
    Get the label of the device that owns ``token``.

    Parameters
    ----------
    registry : :class:`.DeviceRegistry`
    token : str
        Raw access token from the request. It is hashed once and then
        discarded; it never appears in a log message.

    Returns
    -------
    str or None
        The device label, or ``None`` if no registered device matches.

    """
    hashed = digest(token)
    label = registry.lookup(hashed)
    if label is None:
        logger.warning('Invalid access token used (hash = %s)', hashed)
    return label
