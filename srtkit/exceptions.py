"""Custom Exceptions for the srtkit application."""

class SrtKitError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(SrtKitError):
    """Exception raised for errors in configuration loading."""
    pass

class VariablesFileError(SrtKitError):
    """Exception raised when the variables JSON file cannot be read or written."""
    pass

class FormattingError(SrtKitError):
    """Exception raised for errors while writing SRT output."""
    pass

class FileSystemError(SrtKitError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
