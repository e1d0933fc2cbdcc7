"""
Custom exceptions for the jet performance histogramming package

Provides a hierarchy of exceptions for better error handling and diagnostics.
All custom exceptions inherit from JetPerfError for easy catching.
"""

from __future__ import annotations


class JetPerfError(Exception):
    """
    Base exception for all jet performance histogramming errors

    All custom exceptions inherit from this class, allowing users to catch
    all package-specific errors with a single except clause.
    """
    pass


class ConfigurationError(JetPerfError):
    """
    Raised when configuration is invalid or missing required fields

    Examples:
    - Missing histogram config file
    - Invalid bin count or histogram range
    - Momentum bin edges not in ascending order
    """
    pass


class DataLoadError(JetPerfError):
    """
    Raised when an input jet file cannot be loaded

    Examples:
    - File not found
    - Corrupted HDF5 file
    - Missing jet dataset in file
    """
    pass


class FieldMissingError(JetPerfError):
    """
    Raised when a required jet field is not found in the input dataset

    Examples:
    - Missing tagger score column (e.g., mv2c10)
    - Field name typo in the weight option
    """
    def __init__(self, field_name: str, file_path: str = None):
        """
        Initialize FieldMissingError

        Args:
            field_name: Name of the missing field
            file_path: Optional path to the file being read
        """
        self.field_name = field_name
        self.file_path = file_path

        message = f"Required field '{field_name}' not found"
        if file_path:
            message += f" in file: {file_path}"

        super().__init__(message)


class UnknownFlavorError(JetPerfError):
    """
    Raised when a jet carries a truth label outside the B, C, U, T set

    The offending jet contributes to no histogram at all.
    """
    def __init__(self, label):
        self.label = label
        super().__init__(
            f"Unknown truth flavor label: {label!r} "
            f"(expected one of B, C, U, T)"
        )


class DuplicateGroupError(JetPerfError):
    """
    Raised when an output group or dataset already exists

    Examples:
    - write_to called twice on the same output location
    - Two momentum bins configured to produce the same name
    """
    def __init__(self, name: str, parent: str = None):
        self.name = name
        self.parent = parent

        message = f"Output object '{name}' already exists"
        if parent:
            message += f" under '{parent}'"

        super().__init__(message)


class HistogramMismatchError(JetPerfError):
    """
    Raised when merging histograms with incompatible binning

    Examples:
    - Different bin counts
    - Different histogram ranges
    - Different momentum bin edges
    """
    pass


class HistogramsFinalizedError(JetPerfError):
    """
    Raised when histograms are filled or merged after they were written

    Examples:
    - fill called after write_to
    - add called on histograms that were already written out
    """
    pass
