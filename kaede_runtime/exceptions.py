"""
Kaede Runtime Exceptions
========================

Error taxonomy shared by the runtime primitive modules.

Text and numeric operations never raise these; they resolve failures into
sentinels or caller-supplied defaults. Filesystem operations carry them as
``ErrorKind`` tags inside a ``HostResult``. Only template formatting and
configuration loading let an exception escape to the caller.
"""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories reported across the runtime boundary"""
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    IO_FAILURE = "io_failure"
    CONVERSION_FAILURE = "conversion_failure"


class KaedeRuntimeError(Exception):
    """Base exception for the Kaede runtime primitives"""
    kind = None

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self):
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class NotFoundError(KaedeRuntimeError):
    """Raised when a path or search text is absent"""
    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(KaedeRuntimeError):
    """Raised for malformed arguments such as an ill-formed format template"""
    kind = ErrorKind.INVALID_ARGUMENT


class FormatError(InvalidArgumentError):
    """Raised when a format template does not match its argument list"""

    def __init__(self, message: str, template: str = "", position: int = -1):
        super().__init__(message, operation="format")
        self.template = template
        self.position = position

    def __str__(self):
        if self.position >= 0:
            return f"format: {self.message} (at offset {self.position} in {self.template!r})"
        return f"format: {self.message}"


class IOFailureError(KaedeRuntimeError):
    """Raised when a host read/write/rename/copy fails"""
    kind = ErrorKind.IO_FAILURE


class ConversionError(KaedeRuntimeError):
    """Raised when numeric text cannot be parsed"""
    kind = ErrorKind.CONVERSION_FAILURE


class ConfigError(KaedeRuntimeError):
    """Raised when runtime configuration is malformed"""
    pass


_EXCEPTIONS_BY_KIND = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
    ErrorKind.IO_FAILURE: IOFailureError,
    ErrorKind.CONVERSION_FAILURE: ConversionError,
}


def exception_for(kind: ErrorKind, message: str, operation: str = "") -> KaedeRuntimeError:
    """Build the exception matching an error kind"""
    return _EXCEPTIONS_BY_KIND[kind](message, operation)
