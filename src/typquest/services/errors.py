"""Service-layer exceptions."""


class ServiceError(Exception):
    """Base exception for the service layer."""


class FactoryError(ServiceError):
    """Raised when a player or enemy cannot be built from definitions."""


class SaveLoadError(ServiceError):
    """Raised when a saved battle payload is malformed or inconsistent."""
