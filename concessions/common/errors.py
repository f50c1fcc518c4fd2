"""Domain errors and failure typing."""


class ConcessionError(Exception):
    """Base class for concession map failures."""

    error_code = "CONCESSION_ERROR"


class ConfigError(ConcessionError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class DatasetError(ConcessionError):
    """Raised when the deposits document cannot be loaded or has the wrong shape."""

    error_code = "DATASET_ERROR"
