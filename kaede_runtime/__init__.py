"""
Kaede Runtime
Primitive text, math, console and filesystem operations that compiled
Kaede programs link against
"""

import logging

from .config import RuntimeConfig, get_config, set_config, load_config, setup_logging
from .console import ConsoleModule
from .exceptions import (
    ErrorKind, KaedeRuntimeError, NotFoundError, InvalidArgumentError,
    FormatError, IOFailureError, ConversionError, ConfigError,
)
from .filesystem import FileSystemModule
from .formatting import FormatTemplate, compile_template, format_text, render_value
from .numeric import NumericModule
from .random_stream import RandomStream, default_stream, reset_default_stream
from .results import HostResult
from .runtime import KaedeRuntimeLibrary, RuntimeFunction, get_runtime
from .text import StringBuilder, TextModule

__version__ = "1.0.0"

logger = logging.getLogger('KaedeRT')
logger.addHandler(logging.NullHandler())

# Default module instances, shared with the process-wide runtime library
library = get_runtime()
string = library.get_module('string')
math = library.get_module('math')
io = library.get_module('io')
fs = library.get_module('fs')

__all__ = [
    'RuntimeConfig', 'get_config', 'set_config', 'load_config', 'setup_logging',
    'ErrorKind', 'KaedeRuntimeError', 'NotFoundError', 'InvalidArgumentError',
    'FormatError', 'IOFailureError', 'ConversionError', 'ConfigError',
    'HostResult',
    'TextModule', 'StringBuilder', 'NumericModule', 'RandomStream',
    'default_stream', 'reset_default_stream',
    'ConsoleModule', 'FormatTemplate', 'compile_template', 'format_text', 'render_value',
    'FileSystemModule',
    'KaedeRuntimeLibrary', 'RuntimeFunction', 'get_runtime',
    'library', 'string', 'math', 'io', 'fs',
]
