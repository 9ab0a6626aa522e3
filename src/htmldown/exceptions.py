#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmldown library.

This module defines specialized exception classes for the error conditions
that can occur while building translator registries and converting HTML.
Errors raised by user-supplied ``postprocess`` hooks, rule factories and the
HTML parser itself are never wrapped; they reach the caller unchanged.

Exception Hierarchy
-------------------
- HtmlDownError (base exception)

  - ValidationError (parameter/option/rule validation)

  - RegistryFrozenError (mutation of a built translator registry)

  - DependencyError (missing HTML parser backends)

"""

from typing import Any


class HtmlDownError(Exception):
    """Base exception class for all htmldown-specific errors.

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


class ValidationError(HtmlDownError):
    """Exception raised for invalid input parameters, options or rules.

    This exception covers validation errors such as:
    - Invalid option values
    - Unknown translator rule fields
    - Unsupported input types passed to ``translate``

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


class RegistryFrozenError(HtmlDownError):
    """Exception raised when a frozen translator registry is modified.

    Parameters
    ----------
    tag : str
        Tag whose rule was about to be changed

    """

    def __init__(self, tag: str):
        """Initialize the error for the offending tag."""
        super().__init__(f"Translator registry is frozen; cannot change the rule for '{tag}'")
        self.tag = tag


class DependencyError(HtmlDownError):
    """Exception raised when a required HTML parser backend is not available.

    Parameters
    ----------
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    missing_packages : list[tuple[str, str]]
        Packages that need to be installed
    install_command : str
        Command to install missing dependencies

    """

    def __init__(
        self,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        packages = [f"{name}{spec}" for name, spec in missing_packages]
        self.install_command = f"pip install {' '.join(packages)}" if packages else ""
        if message is None:
            message = "Required HTML parser backend is not installed"
            if packages:
                message += f": {', '.join(packages)}. Install with: {self.install_command}"
        super().__init__(message, original_error=original_error)
        self.missing_packages = missing_packages
