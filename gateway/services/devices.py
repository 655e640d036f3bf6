"""
Registry of authorized devices.

The registry is loaded once at startup from a plain text file with one device
per line::

    <sha256-hex-digest> <label>

Blank lines and lines starting with ``#`` are ignored. Any other line that
does not consist of exactly a 64-character hex digest and a label rejects the
whole file. If the same digest appears twice, the first line wins.

A :class:`DeviceRegistry` is never modified after it is built, so any number
of request threads may call :meth:`DeviceRegistry.lookup` without locking.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional

from ..domain import Device
from ..exceptions import DeviceFileUnavailable, MalformedDeviceFile

logger = logging.getLogger(__name__)

DIGEST = re.compile(r'^[0-9a-fA-F]{64}$')


class DeviceRegistry(object):
    """Immutable mapping from token digest to device label."""

    def __init__(self, devices: Iterable[Device] = ()) -> None:
        """Build the registry; on duplicate digests the first device wins."""
        table: Dict[str, str] = {}
        for device in devices:
            table.setdefault(device.digest.lower(), device.label)
        self._devices: Mapping[str, str] = MappingProxyType(table)

    @classmethod
    def load(cls, path: str) -> 'DeviceRegistry':
        """
        Load the registry from a device file.

        Raises
        ------
        :class:`.DeviceFileUnavailable`
            If the file cannot be opened or decoded.
        :class:`.MalformedDeviceFile`
            If any line is malformed.

        """
        try:
            with open(path, encoding='utf-8') as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise DeviceFileUnavailable(
                f'Cannot read device file {path}: {e}'
            ) from e

        devices = []
        seen: Dict[str, int] = {}
        for number, line in enumerate(lines, start=1):
            device = _parse_line(path, number, line)
            if device is None:
                continue
            if device.digest in seen:
                logger.warning('Duplicate device digest for %r on line %i of'
                               ' %s; keeping line %i', device.label, number,
                               path, seen[device.digest])
                continue
            seen[device.digest] = number
            devices.append(device)

        registry = cls(devices)
        logger.info('Loaded %i devices from %s', len(registry), path)
        return registry

    def lookup(self, digest: str) -> Optional[str]:
        """Get the label of the device with ``digest``, if there is one."""
        return self._devices.get(digest.lower())

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, str) and digest.lower() in self._devices

    def __iter__(self) -> Iterator[Device]:
        return (Device(d, label) for d, label in self._devices.items())


def _parse_line(path: str, number: int, line: str) -> Optional[Device]:
    """Parse one line of the device file; ``None`` for blanks and comments."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None
    fields = line.split()
    # The line may hold a secret pasted by mistake, so it is never echoed.
    if len(fields) != 2:
        raise MalformedDeviceFile(
            f'{path}, line {number}: expected "<digest> <label>",'
            f' got {len(fields)} fields'
        )
    digest, label = fields
    if not DIGEST.match(digest):
        raise MalformedDeviceFile(
            f'{path}, line {number}: digest must be 64 hex characters'
        )
    return Device(digest.lower(), label)
