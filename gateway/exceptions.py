"""Exceptions raised by the gateway."""

from werkzeug.exceptions import BadRequest, Unauthorized


class ConfigurationError(RuntimeError):
    """The gateway cannot start with the supplied configuration."""


class DeviceFileUnavailable(ConfigurationError):
    """The device file does not exist or cannot be read."""


class MalformedDeviceFile(ConfigurationError):
    """A line in the device file is not of the form ``<digest> <label>``."""


class CredentialsUnavailable(ConfigurationError):
    """The TLS certificate or private key cannot be loaded."""


class PortUnavailable(ConfigurationError):
    """The listening address cannot be bound."""


class MissingToken(BadRequest):
    """The request carries no ``token`` parameter."""

    description = 'Missing access token'


class InvalidToken(Unauthorized):
    """The request token does not belong to any registered device."""

    description = 'Invalid access token'


class SyncNotSupported(NotImplementedError):
    """The document store is local-only and cannot be synchronized."""
