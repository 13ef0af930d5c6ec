#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mailtree library.

This module defines specialized exception classes for the error conditions
that can occur while loading an email document tree and rendering it. Every
error is local to a single render invocation; none of them leaves the input
tree or another render's scope stack in a modified state.

Exception Hierarchy
-------------------
- MailtreeError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer)

  - ParsingError (document JSON could not be turned into a node tree)

  - RenderingError (output generation failures)
    - UnsupportedNodeTypeError (node type has no registered renderer)
    - MissingRequiredVariableError (required variable has no value)
    - MalformedRepeatTargetError (repeat target is not a sequence)
    - InvariantViolationError (document structure breaks a tree invariant)
    - OutputWriteError (file write failures)

"""

from typing import Any


class MailtreeError(Exception):
    """Base exception class for all mailtree-specific errors.

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


class ValidationError(MailtreeError):
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


class InvalidOptionsError(ValidationError):
    """Exception raised when the wrong options class is given to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(MailtreeError):
    """Exception raised when document JSON cannot be loaded into a node tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Stage where parsing failed (e.g., "json_parsing", "node_construction")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MailtreeError):
    """Exception raised when a document tree cannot be rendered.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        Stage where rendering failed (e.g., "validation", "dispatch", "variables")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class UnsupportedNodeTypeError(RenderingError):
    """Exception raised when a node's type has no registered renderer.

    This is fatal to the whole render call: an email with a silently
    dropped section is worse than a loud failure.

    Parameters
    ----------
    node_type : str
        The unrecognized node type
    registry_name : str, optional
        Name of the renderer registry that was consulted

    """

    def __init__(self, node_type: str, registry_name: str | None = None, message: str | None = None):
        """Initialize the unsupported node type error."""
        if message is None:
            where = f" in the '{registry_name}' renderer" if registry_name else ""
            message = f"Unsupported node type '{node_type}'{where}"
        super().__init__(message, rendering_stage="dispatch")
        self.node_type = node_type
        self.registry_name = registry_name


class MissingRequiredVariableError(RenderingError):
    """Exception raised when a required variable resolves nowhere and has no fallback.

    Parameters
    ----------
    variable_name : str
        Name of the missing variable

    """

    def __init__(self, variable_name: str, message: str | None = None):
        """Initialize the missing variable error."""
        if message is None:
            message = f"Required variable '{variable_name}' has no value and no fallback"
        super().__init__(message, rendering_stage="variables")
        self.variable_name = variable_name


class MalformedRepeatTargetError(RenderingError):
    """Exception raised when a repeat node's ``each`` does not name a sequence.

    The render engine treats this as zero iterations and logs a warning.

    Parameters
    ----------
    variable_name : str
        The ``each`` variable name
    value_type : type
        Type of the value that was found instead of a sequence

    """

    def __init__(self, variable_name: str, value_type: type, message: str | None = None):
        """Initialize the malformed repeat target error."""
        if message is None:
            message = f"Repeat target '{variable_name}' is a {value_type.__name__}, not a list"
        super().__init__(message, rendering_stage="repeat")
        self.variable_name = variable_name
        self.value_type = value_type


class InvariantViolationError(RenderingError):
    """Exception raised when the document tree breaks a structural invariant.

    Parameters
    ----------
    message : str
        Description of the violation
    node_type : str, optional
        Type of the offending node
    path : str, optional
        Location of the offending node, e.g. ``doc/0/columns/1``

    """

    def __init__(self, message: str, node_type: str | None = None, path: str | None = None):
        """Initialize the invariant violation error."""
        if path:
            message = f"{message} (at {path})"
        super().__init__(message, rendering_stage="validation")
        self.node_type = node_type
        self.path = path


class OutputWriteError(RenderingError):
    """Exception raised when rendered output cannot be written.

    Parameters
    ----------
    file_path : str
        Path that could not be written

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="output", original_error=original_error)
        self.file_path = file_path


__all__ = [
    "MailtreeError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "RenderingError",
    "UnsupportedNodeTypeError",
    "MissingRequiredVariableError",
    "MalformedRepeatTargetError",
    "InvariantViolationError",
    "OutputWriteError",
]
