"""Custom exceptions for the Hurl to Bruno converter.

This module defines the exception hierarchy for hurl2bruno.
All custom exceptions inherit from Hurl2BrunoException base class.

Parsing and translation never raise: malformed Hurl lines are ignored and
unhandled assertions are flagged in the generated output. Filesystem errors
are not wrapped and propagate as the builtin OSError subclasses.
"""


class Hurl2BrunoException(Exception):
    """Base exception for all hurl2bruno errors.

    All custom exceptions in hurl2bruno inherit from this base class to
    allow catching all tool-specific errors.
    """

    pass


# Settings Exceptions


class SettingsException(Hurl2BrunoException):
    """Base exception for settings errors.

    This exception is raised when the converter configuration cannot be
    loaded.
    """

    pass


class SettingsParseException(SettingsException):
    """Raised when the settings file cannot be parsed.

    This exception is raised when:
    - YAML syntax is invalid
    - Document is not a mapping
    """

    pass


class SettingsValidationException(SettingsException):
    """Raised when settings values are invalid.

    This exception is raised when:
    - Unknown keys are present
    - A value has the wrong type or is empty
    """

    pass
