#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the html2gemini library.

This module defines the exception classes raised while loading, decoding,
parsing and rendering HTML documents as gemtext. They carry more specific
error information than the generic built-ins.

Exception Hierarchy
-------------------
- Html2GeminiError (base exception)

  - ValidationError (parameter/option validation)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, directories, read failures)

  - ParsingError (input document loading failures)
    - DecodingError (byte stream cannot be decoded to text)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class Html2GeminiError(Exception):
    """Base exception class for all html2gemini-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(Html2GeminiError):
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


class FileError(Html2GeminiError):
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


class FileAccessError(FileError):
    """Exception raised when a file exists but cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Html2GeminiError):
    """Exception raised when an input document cannot be loaded.

    Errors raised by the HTML parser itself are propagated unchanged; this
    class covers failures in the steps that prepare input for the parser.

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


class DecodingError(ParsingError):
    """Exception raised when input bytes cannot be decoded to text.

    Parameters
    ----------
    message : str, optional
        Custom error message
    encoding : str, optional
        The encoding that was attempted
    original_error : Exception, optional
        The underlying decode error

    """

    def __init__(
        self, message: str | None = None, encoding: str | None = None, original_error: Exception | None = None
    ):
        """Initialize the decoding error."""
        if message is None:
            message = f"Could not decode input as {encoding}" if encoding else "Could not decode input bytes"
        super().__init__(message, parsing_stage="decoding", original_error=original_error)
        self.encoding = encoding


class RenderingError(Html2GeminiError):
    """Exception raised when gemtext rendering fails.

    A failed render produces no partial output.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing an output file fails."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


class DependencyError(Html2GeminiError):
    """Exception raised when an optional dependency is not installed.

    Parameters
    ----------
    message : str
        Description of what needed the dependency
    missing_packages : list[tuple[str, str]], optional
        List of (package_name, version_spec) tuples for missing packages
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        missing_packages: list[tuple[str, str]] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        missing_packages = missing_packages or []
        if missing_packages:
            packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
            message += f"\nInstall with: pip install {packages_str}"
        super().__init__(message, original_error=original_error)
        self.missing_packages = missing_packages
