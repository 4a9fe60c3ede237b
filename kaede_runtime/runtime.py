"""
Kaede Runtime Library
=====================

Linkage surface for compiled programs. Generated code refers to runtime
primitives by their source-language names ("string.indexOf", "math.PI",
"fs.readFile"); this registry binds those names to the Python modules.

Modules:
- string: TextModule
- math:   NumericModule
- io:     ConsoleModule
- fs:     FileSystemModule
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TextIO

from .config import RuntimeConfig, get_config
from .console import ConsoleModule
from .exceptions import NotFoundError
from .filesystem import FileSystemModule
from .numeric import NumericModule
from .random_stream import RandomStream
from .text import StringBuilder, TextModule

logger = logging.getLogger('KaedeRT.runtime')

# Source-language name -> attribute of the Python module
EXPORTS: Dict[str, Dict[str, str]] = {
    'string': {
        'len': 'length', 'isEmpty': 'is_empty', 'charAt': 'char_at',
        'slice': 'slice', 'substring': 'substring',
        'indexOf': 'index_of', 'lastIndexOf': 'last_index_of', 'contains': 'contains',
        'startsWith': 'starts_with', 'endsWith': 'ends_with',
        'toUpper': 'to_upper', 'toLower': 'to_lower', 'capitalize': 'capitalize',
        'trim': 'trim', 'trimLeft': 'trim_left', 'trimRight': 'trim_right',
        'isDigit': 'is_digit', 'isAlpha': 'is_alpha', 'isAlnum': 'is_alnum',
        'isSpace': 'is_space', 'isNumeric': 'is_numeric',
        'split': 'split', 'join': 'join', 'replace': 'replace', 'replaceFirst': 'replace_first',
        'repeat': 'repeat', 'padLeft': 'pad_left', 'padRight': 'pad_right', 'reverse': 'reverse',
        'toInt': 'to_int', 'toFloat': 'to_float', 'fromInt': 'from_int', 'fromFloat': 'from_float',
    },
    'math': {
        'abs': 'abs', 'sign': 'sign', 'min': 'min', 'max': 'max', 'clamp': 'clamp',
        'floor': 'floor', 'ceil': 'ceil', 'round': 'round', 'trunc': 'trunc',
        'pow': 'pow', 'sqrt': 'sqrt', 'cbrt': 'cbrt', 'exp': 'exp', 'expm1': 'expm1',
        'log': 'log', 'log2': 'log2', 'log10': 'log10', 'log1p': 'log1p',
        'sin': 'sin', 'cos': 'cos', 'tan': 'tan', 'asin': 'asin', 'acos': 'acos',
        'atan': 'atan', 'atan2': 'atan2', 'sinh': 'sinh', 'cosh': 'cosh', 'tanh': 'tanh',
        'asinh': 'asinh', 'acosh': 'acosh', 'atanh': 'atanh',
        'toRadians': 'to_radians', 'toDegrees': 'to_degrees',
        'hypot': 'hypot', 'fmod': 'fmod', 'lerp': 'lerp',
        'isNaN': 'is_nan', 'isInf': 'is_inf', 'isFinite': 'is_finite',
        'random': 'random', 'randomInt': 'random_int', 'randomFloat': 'random_float',
        'seed': 'seed',
        'gcd': 'gcd', 'lcm': 'lcm', 'factorial': 'factorial', 'fibonacci': 'fibonacci',
        'isPrime': 'is_prime',
    },
    'io': {
        'print': 'print', 'println': 'println', 'eprint': 'eprint', 'eprintln': 'eprintln',
        'format': 'format', 'printf': 'printf',
        'readln': 'readln', 'readInt': 'read_int', 'readFloat': 'read_float',
        'dbg': 'dbg',
    },
    'fs': {
        'readFile': 'read_file', 'writeFile': 'write_file', 'appendFile': 'append_file',
        'readLines': 'read_lines', 'writeLines': 'write_lines',
        'exists': 'exists', 'isFile': 'is_file', 'isDir': 'is_dir', 'fileSize': 'file_size',
        'extension': 'extension', 'filename': 'filename', 'parent': 'parent',
        'join': 'join', 'absolute': 'absolute',
        'mkdir': 'mkdir', 'mkdirp': 'mkdirp', 'remove': 'remove', 'removeAll': 'remove_all',
        'copy': 'copy', 'move': 'move', 'listDir': 'list_dir',
        'cwd': 'cwd', 'chdir': 'chdir',
    },
}

CONSTANTS = ('PI', 'E', 'TAU', 'SQRT2', 'SQRT1_2', 'LN2', 'LN10', 'LOG2E', 'LOG10E',
             'INT_MAX', 'INT_MIN', 'FLOAT_MAX', 'FLOAT_MIN', 'INFINITY', 'NEG_INFINITY', 'NAN')


@dataclass
class RuntimeFunction:
    """A primitive reachable from compiled code"""
    name: str
    function: Callable
    description: str
    category: str


class KaedeRuntimeLibrary:
    """Runtime modules and their name registry"""

    def __init__(self, config: Optional[RuntimeConfig] = None,
                 stream: Optional[RandomStream] = None,
                 stdout: Optional[TextIO] = None, stdin: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None):
        self.modules = {
            'string': TextModule(config),
            'math': NumericModule(stream),
            'io': ConsoleModule(stdout, stdin, stderr, config),
            'fs': FileSystemModule(config),
        }
        self.functions = self._build_function_registry()
        self.functions['string.StringBuilder'] = RuntimeFunction(
            name='string.StringBuilder',
            function=StringBuilder,
            description=StringBuilder.__doc__,
            category='string',
        )
        self.constants = {
            f"math.{name}": getattr(NumericModule, name) for name in CONSTANTS
        }

    def _build_function_registry(self) -> Dict[str, RuntimeFunction]:
        """Bind every exported name to its module attribute"""
        functions = {}

        for module_name, exports in EXPORTS.items():
            module = self.modules[module_name]
            for source_name, attr_name in exports.items():
                attr = getattr(module, attr_name)
                function_name = f"{module_name}.{source_name}"
                functions[function_name] = RuntimeFunction(
                    name=function_name,
                    function=attr,
                    description=(attr.__doc__ or f"{module_name} function {source_name}").strip(),
                    category=module_name,
                )

        return functions

    def get_module(self, name: str):
        """Get module by name"""
        return self.modules.get(name)

    def get_function(self, name: str) -> Optional[RuntimeFunction]:
        """Get function by qualified name"""
        return self.functions.get(name)

    def get_constant(self, name: str) -> Any:
        if name not in self.constants:
            raise NotFoundError(f"Constant '{name}' not found", operation="link")
        return self.constants[name]

    def list_modules(self) -> List[str]:
        return list(self.modules.keys())

    def list_functions(self, module_name: Optional[str] = None) -> List[str]:
        """List functions in a module, or all functions"""
        if module_name:
            return [name for name in self.functions if name.startswith(f"{module_name}.")]
        return list(self.functions.keys())

    def call(self, name: str, *args, **kwargs) -> Any:
        """
        Call a primitive by its qualified source-language name

        Raises:
            NotFoundError: If no primitive has that name
        """
        func = self.functions.get(name)
        if func is None:
            logger.error(f"Unresolved runtime symbol: {name}")
            raise NotFoundError(f"Function '{name}' not found", operation="link")
        return func.function(*args, **kwargs)


_runtime: Optional[KaedeRuntimeLibrary] = None


def get_runtime() -> KaedeRuntimeLibrary:
    """
    Get the process-wide runtime library

    The first call loads the process-wide configuration, so a bad
    KAEDE_RUNTIME_CONFIG file raises ConfigError here, when the runtime is
    built, rather than from the first text, console or random operation
    that reads it.

    Raises:
        ConfigError: If the configured file cannot be loaded
    """
    global _runtime
    if _runtime is None:
        get_config()
        _runtime = KaedeRuntimeLibrary()
    return _runtime
