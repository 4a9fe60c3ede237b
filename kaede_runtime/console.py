"""
Kaede Runtime Console Module

Line-oriented and formatted console I/O for compiled programs.

Output goes to the primary stream, diagnostics (eprint, eprintln, dbg) to
the error stream only. Numeric reads take the next whitespace-delimited
token, which may span lines; whatever follows the token on its line stays
pending and is what the next readln returns. A malformed token is consumed
and the read returns the caller's default, or the configured fallback.
"""

import logging
from typing import Any, Optional, TextIO

from rich.console import Console
from rich.text import Text

from . import host
from .config import RuntimeConfig, get_config
from .conversions import parse_int, parse_float
from .formatting import compile_template, render_value

logger = logging.getLogger('KaedeRT.console')

_NOTHING = object()
_WHITESPACE = " \t\n\r\f\v"


class ConsoleModule:
    """
    Console I/O bound to a set of streams

    Streams left as None resolve to the process streams at call time.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stdin: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None, config: Optional[RuntimeConfig] = None):
        self._stdout = stdout
        self._stdin = stdin
        self._stderr = stderr
        self._config = config
        self._pending: Optional[str] = None  # unread rest of the current input line
        self._diagnostics: Optional[Console] = None

    @property
    def config(self) -> RuntimeConfig:
        return self._config if self._config is not None else get_config()

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else host.stdout()

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else host.stdin()

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else host.stderr()

    # ============ Output ============

    def print(self, value: Any = _NOTHING) -> None:
        if value is _NOTHING:
            return
        self.stdout.write(render_value(value))

    def println(self, value: Any = _NOTHING) -> None:
        """Write a value and a line terminator; no value writes a bare newline"""
        if value is _NOTHING:
            self.stdout.write("\n")
        else:
            self.stdout.write(render_value(value) + "\n")

    def eprint(self, value: Any = _NOTHING) -> None:
        if value is _NOTHING:
            return
        self.stderr.write(render_value(value))

    def eprintln(self, value: Any = _NOTHING) -> None:
        if value is _NOTHING:
            self.stderr.write("\n")
        else:
            self.stderr.write(render_value(value) + "\n")

    # ============ Formatting ============

    @staticmethod
    def format(template: str, *args: Any) -> str:
        """
        Render a printf-style template

        Raises:
            FormatError: If the arguments do not match the placeholders
        """
        return compile_template(template).render(args)

    def printf(self, template: str, *args: Any) -> None:
        """Format and write without a line terminator; nothing is written on error"""
        self.stdout.write(self.format(template, *args))

    # ============ Input ============

    def _next_line(self) -> Optional[str]:
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        line = self.stdin.readline()
        if line == "":
            return None
        return line

    def readln(self) -> str:
        """Read one line without its terminator; end of stream gives ''"""
        line = self._next_line()
        if line is None:
            return ""
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def _next_token(self) -> Optional[str]:
        while True:
            line = self._next_line()
            if line is None:
                return None
            line = line.lstrip(_WHITESPACE)
            if not line:
                continue
            end = 0
            while end < len(line) and line[end] not in _WHITESPACE:
                end += 1
            self._pending = line[end:] or None
            return line[:end]

    def read_int(self, default: Optional[int] = None) -> int:
        """Read the next token as an integer"""
        if default is None:
            default = self.config.read_int_default
        token = self._next_token()
        if token is None:
            logger.debug("read_int: end of input")
            return default
        value = parse_int(token)
        if value is None:
            logger.debug(f"read_int: malformed token {token!r}")
            return default
        return value

    def read_float(self, default: Optional[float] = None) -> float:
        """Read the next token as a float"""
        if default is None:
            default = self.config.read_float_default
        token = self._next_token()
        if token is None:
            logger.debug("read_float: end of input")
            return default
        value = parse_float(token)
        if value is None:
            logger.debug(f"read_float: malformed token {token!r}")
            return default
        return value

    # ============ Debugging ============

    def _diagnostic_console(self) -> Console:
        if self._diagnostics is None:
            if self._stderr is not None:
                self._diagnostics = Console(file=self._stderr, highlight=False,
                                            markup=False, emoji=False, soft_wrap=True)
            else:
                self._diagnostics = Console(stderr=True, highlight=False,
                                            markup=False, emoji=False, soft_wrap=True)
        return self._diagnostics

    def dbg(self, value: Any, label: Optional[str] = None) -> Any:
        """
        Trace a value on the diagnostic stream and return it unchanged

        Args:
            value: Value to trace
            label: Optional name printed before the value

        Returns:
            value, so the call can wrap any expression
        """
        header = Text(self.config.debug_prefix, style="bold magenta")
        header.append(" ")
        if label:
            header.append(f"{label}: ", style="cyan")
        self._diagnostic_console().print(header, end="")
        # Value text goes out byte for byte, without rich tab expansion or control stripping
        stream = self.stderr
        stream.write(render_value(value) + "\n")
        stream.flush()
        return value
