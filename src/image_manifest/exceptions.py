"""Custom exceptions for the image manifest builder."""


class ManifestBuilderError(Exception):
    """Base exception for all manifest builder errors."""

    pass


class ConfigurationError(ManifestBuilderError):
    """Raised when required settings are missing or invalid."""

    pass


class ParseError(ManifestBuilderError):
    """Raised when the repo tags record is not valid CSV."""

    pass


class AcquisitionError(ManifestBuilderError):
    """Raised when pulling an image fails."""

    pass


class EnumerationError(ManifestBuilderError):
    """Raised when listing the local images fails."""

    pass


class OutputError(ManifestBuilderError):
    """Raised when the manifest file cannot be written."""

    pass
