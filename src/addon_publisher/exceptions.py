"""Custom exceptions for addon publisher."""


class AddonPublisherError(Exception):
    """Base exception for addon publisher errors."""
    pass


class ConfigurationError(AddonPublisherError):
    """Raised when there's an error in configuration."""
    pass


class StorageError(AddonPublisherError):
    """Raised when the persisted catalog cannot be read or written."""
    pass
