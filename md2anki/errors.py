class Md2AnkiError(Exception):
    """Base class for everything the package builder raises on purpose."""


class ConfigurationError(Md2AnkiError, ValueError):
    """Model, note or tag data that can never produce a valid collection."""


class InvalidTagError(ConfigurationError):
    pass


class PackageWriteError(Md2AnkiError):
    """The collection database or the zip archive could not be written."""


class InvalidPackageError(Md2AnkiError):
    """An uploaded file is not a readable .apkg archive."""
