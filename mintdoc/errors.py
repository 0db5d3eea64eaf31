"""Structured error types raised during documentation generation.

Every error carries a machine-readable :class:`ErrorCode`, the identity of the
offending resource (an API item, file path or manifest) and, where available,
the lower-level exception that caused it.
"""

import json
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable error codes for programmatic handling."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FILENAME = "INVALID_FILENAME"
    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    RECURSION_LIMIT = "RECURSION_LIMIT"
    TIME_LIMIT = "TIME_LIMIT"
    FILE_SIZE_LIMIT = "FILE_SIZE_LIMIT"
    TOTAL_SIZE_LIMIT = "TOTAL_SIZE_LIMIT"
    RENDER_ERROR = "RENDER_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    NAVIGATION_ERROR = "NAVIGATION_ERROR"
    DOCS_JSON_WRITE_ERROR = "DOCS_JSON_WRITE_ERROR"
    API_LOAD_ERROR = "API_LOAD_ERROR"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


class DocumentationError(Exception):
    """Base class for all documentation generation errors."""

    default_code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        *,
        resource: str | None = None,
        operation: str | None = None,
        cause: BaseException | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error with its code and context."""
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.resource = resource
        self.operation = operation
        self.cause = cause
        self.data = data or {}
        if cause is not None:
            self.__cause__ = cause

    def detailed_message(self) -> str:
        """Return the message together with its context, one field per line."""
        lines = [f"[{self.code}] {self.message}"]
        if self.resource:
            lines.append(f"  Resource: {self.resource}")
        if self.operation:
            lines.append(f"  Operation: {self.operation}")
        if self.cause is not None:
            lines.append(f"  Caused by: {self.cause}")
        if self.data:
            lines.append(f"  Context: {json.dumps(self.data, sort_keys=True, default=str)}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for reports."""
        return {
            "name": type(self).__name__,
            "code": str(self.code),
            "message": self.message,
            "resource": self.resource,
            "operation": self.operation,
            "cause": str(self.cause) if self.cause is not None else None,
            "data": self.data,
        }


class ValidationError(DocumentationError):
    """Unsafe or unusable input: path segments, names, manifests."""

    default_code = ErrorCode.VALIDATION_ERROR


class BudgetError(DocumentationError):
    """A hard resource limit was exceeded."""

    default_code = ErrorCode.RECURSION_LIMIT


class RenderError(DocumentationError):
    """The templating collaborator failed to render a page."""

    default_code = ErrorCode.RENDER_ERROR


class FileSystemError(DocumentationError):
    """Reading or writing generated output failed."""

    default_code = ErrorCode.FILE_WRITE_ERROR


class NavigationError(DocumentationError):
    """Navigation synthesis or manifest persistence failed."""

    default_code = ErrorCode.NAVIGATION_ERROR


class ApiModelError(DocumentationError):
    """The API model could not be loaded."""

    default_code = ErrorCode.API_LOAD_ERROR


class ConfigurationError(DocumentationError):
    """The configuration file is malformed."""

    default_code = ErrorCode.INVALID_CONFIGURATION
