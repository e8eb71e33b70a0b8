"""Custom exceptions for the delivery path."""


class AppException(Exception):
    """Base exception for application errors."""
    pass


class ConfigurationError(AppException):
    """Raised when a required backend (datastore, storage) is not configured."""
    pass


class InvalidPathError(AppException):
    """Raised when an inbound game path is malformed."""
    pass


class StorageError(AppException):
    """Raised when the object store fails (transport, auth, unexpected status)."""
    pass


class StorageObjectNotFound(StorageError):
    """Raised when the requested object does not exist in the bucket."""
    pass
