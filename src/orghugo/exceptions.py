#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the orghugo library.

This module defines specialized exception classes for the error conditions
that can occur while parsing Org documents and exporting them for Hugo.
An export is all-or-nothing: every error below aborts the export pass that
raised it and is propagated to the caller unchanged.

Exception Hierarchy
-------------------
- OrgHugoError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or exporter)
    - ConfigurationError (missing or malformed setting)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - OutputWriteError (file write failures)

  - ParsingError (input document parsing failures)

  - RenderingError (export pass failures raised by the host engine)
    - UnresolvedFootnoteError (footnote reference without a definition)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class OrgHugoError(Exception):
    """Base exception class for all orghugo-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(OrgHugoError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigurationError(ValidationError):
    """Exception raised when a required setting is missing or malformed.

    Raised before any rendering work starts, e.g. when exporting to a file
    without an export path, or when an in-buffer keyword or configuration
    file holds a value that cannot be interpreted.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    setting : str, optional
        Name of the offending setting (e.g. ``"export_path"``)
    value : any, optional
        The rejected value
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    setting : str or None
        Name of the offending setting

    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name=setting, parameter_value=value, original_error=original_error)
        self.setting = setting


class FileError(OrgHugoError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class OutputWriteError(FileError):
    """Exception raised when writing the exported file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(OrgHugoError):
    """Exception raised when Org document parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(OrgHugoError):
    """Exception raised when the export pass fails.

    This is the error type of the host engine and its default transcoders
    (no transcoder registered for a node kind, malformed nodes, ...).
    Backend rules that delegate to a default transcoder let it propagate
    as-is.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The node kind or stage where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class UnresolvedFootnoteError(RenderingError):
    """Exception raised when a footnote reference has no definition.

    Parameters
    ----------
    identifier : str
        Label of the dangling reference (empty for anonymous notes)
    message : str, optional
        Custom error message

    Attributes
    ----------
    identifier : str
        Label of the dangling reference

    """

    def __init__(self, identifier: str, message: str | None = None):
        """Initialize the unresolved footnote error."""
        if message is None:
            message = f"Definition not found for footnote [fn:{identifier}]"
        super().__init__(message, rendering_stage="footnote-reference")
        self.identifier = identifier


class DependencyError(OrgHugoError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import error raised while importing the packages

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} support requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} support has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
