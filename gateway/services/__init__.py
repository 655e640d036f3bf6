"""Services used by the gateway: the device registry and document store."""

from .devices import DeviceRegistry
from .store import MemoryStore, NoSync
