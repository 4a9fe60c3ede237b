"""
Host call results

Tagged success/failure values returned by every host facility call, in the
style of a Rust ``Result``. Filesystem operations branch on ``ok`` instead of
catching exceptions.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import ErrorKind, exception_for


@dataclass(frozen=True)
class HostResult:
    """Outcome of a single host facility request"""
    value: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""
    operation: str = ""
    code: Optional[int] = None  # host errno, when there is one

    @classmethod
    def success(cls, value: Any = None, operation: str = "") -> 'HostResult':
        return cls(value=value, operation=operation)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, operation: str = "",
                code: Optional[int] = None) -> 'HostResult':
        return cls(error=kind, message=message, operation=operation, code=code)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value or raise the exception matching the failure kind"""
        if self.ok:
            return self.value
        raise exception_for(self.error, self.message, self.operation)

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.ok else default

    def __bool__(self):
        return self.ok
