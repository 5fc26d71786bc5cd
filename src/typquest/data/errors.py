"""Exceptions raised while loading enemy, skill, equipment and word definitions."""


class DataError(Exception):
    """Base exception for the definitions layer."""


class DataLoadError(DataError):
    """A definition file is missing, unreadable or not JSON."""


class DataValidationError(DataError):
    """A definition file parsed but its content has the wrong shape or values."""
