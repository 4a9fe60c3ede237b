"""
Kaede Runtime Host Facilities

This module is the only place where the runtime touches the operating
system: file access, path syntax, directory mutation, console streams,
the working directory and the entropy source. Each request that can fail
returns a HostResult; OSError never leaves this module.
"""

import os
import sys
import shutil
import secrets
import logging
from typing import Any, Callable, List, TextIO, Tuple

from .exceptions import ErrorKind
from .results import HostResult

# Set up logging
logger = logging.getLogger('KaedeRT.host')


def _guard(operation: str, path: str, func: Callable[..., Any], *args, **kwargs) -> HostResult:
    """Run a host request and convert its failure into a HostResult"""
    try:
        return HostResult.success(func(*args, **kwargs), operation)
    except FileNotFoundError as e:
        logger.debug(f"{operation} {path}: not found")
        return HostResult.failure(ErrorKind.NOT_FOUND, str(e), operation, e.errno)
    except OSError as e:
        logger.warning(f"{operation} {path} failed: {e}")
        return HostResult.failure(ErrorKind.IO_FAILURE, str(e), operation, e.errno)
    except UnicodeError as e:
        logger.warning(f"{operation} {path}: cannot convert text: {e}")
        return HostResult.failure(ErrorKind.CONVERSION_FAILURE, str(e), operation)
    except ValueError as e:
        # os functions reject paths with embedded NUL bytes
        logger.warning(f"{operation} {path!r}: invalid argument: {e}")
        return HostResult.failure(ErrorKind.INVALID_ARGUMENT, str(e), operation)


# ============ File contents ============

def _read_text(path: str, encoding: str) -> str:
    with open(path, 'rb') as f:
        return f.read().decode(encoding)


def _write_bytes(path: str, data: bytes, mode: str) -> int:
    with open(path, mode) as f:
        return f.write(data)


def read_text(path: str, encoding: str) -> HostResult:
    """Read a whole file and decode it"""
    return _guard('read', path, _read_text, path, encoding)


def write_text(path: str, content: str, encoding: str, append: bool = False) -> HostResult:
    """
    Encode and write text to a file

    Args:
        path: File path
        content: Text to write
        encoding: Byte codec
        append: Append instead of truncating

    Returns:
        HostResult holding the number of bytes written
    """
    operation = 'append' if append else 'write'
    # Encode before opening so a conversion failure leaves the file untouched
    try:
        data = content.encode(encoding)
    except UnicodeError as e:
        logger.warning(f"{operation} {path}: cannot convert text: {e}")
        return HostResult.failure(ErrorKind.CONVERSION_FAILURE, str(e), operation)
    mode = 'ab' if append else 'wb'
    return _guard(operation, path, _write_bytes, path, data, mode)


# ============ Metadata ============

def stat(path: str, follow_symlinks: bool = True) -> HostResult:
    """Query host metadata for a path"""
    return _guard('stat', path, os.stat, path, follow_symlinks=follow_symlinks)


# ============ Path syntax ============

def join_path(*parts: str) -> str:
    return os.path.join(*parts)


def absolute_path(path: str) -> str:
    return os.path.abspath(path)


def split_extension(path: str) -> Tuple[str, str]:
    return os.path.splitext(path)


def base_name(path: str) -> str:
    return os.path.basename(path)


def dir_name(path: str) -> str:
    return os.path.dirname(path)


# ============ Directories ============

def make_dir(path: str) -> HostResult:
    return _guard('mkdir', path, os.mkdir, path)


def make_dirs(path: str) -> HostResult:
    return _guard('mkdirp', path, os.makedirs, path, exist_ok=True)


def list_dir(path: str) -> HostResult:
    return _guard('listdir', path, os.listdir, path)


def remove_file(path: str) -> HostResult:
    return _guard('unlink', path, os.unlink, path)


def remove_dir(path: str) -> HostResult:
    return _guard('rmdir', path, os.rmdir, path)


def _walk_bottom_up(path: str) -> List[Tuple[str, bool]]:
    entries = []

    def _on_error(e):
        logger.warning(f"Error walking {e.filename}: {e}")

    for root, dirs, files in os.walk(path, topdown=False, onerror=_on_error):
        for name in files:
            entries.append((os.path.join(root, name), False))
        for name in dirs:
            child = os.path.join(root, name)
            # Symlinked directories are unlinked, never descended into
            entries.append((child, not os.path.islink(child)))
    return entries


def walk_bottom_up(path: str) -> HostResult:
    """
    List every entry below a directory, children before their parents

    Returns:
        HostResult holding (path, is_directory) pairs; the root is not included
    """
    return _guard('walk', path, _walk_bottom_up, path)


# ============ Copy and rename ============

def copy_file(src: str, dst: str) -> HostResult:
    """Copy file contents and permission bits, overwriting dst"""
    return _guard('copy', src, shutil.copy, src, dst)


def copy_tree(src: str, dst: str) -> HostResult:
    """Copy a directory recursively, merging into an existing dst"""
    return _guard('copytree', src, shutil.copytree, src, dst, symlinks=True, dirs_exist_ok=True)


def rename(src: str, dst: str) -> HostResult:
    """Atomic rename, replacing an existing dst"""
    return _guard('rename', src, os.replace, src, dst)


def move_across_devices(src: str, dst: str) -> HostResult:
    """Best-effort move for renames the host refuses (different devices)"""
    return _guard('move', src, shutil.move, src, dst)


# ============ Process environment ============

def get_cwd() -> HostResult:
    return _guard('getcwd', '.', os.getcwd)


def set_cwd(path: str) -> HostResult:
    return _guard('chdir', path, os.chdir, path)


def entropy_u32() -> int:
    """32 bits from the host entropy source"""
    return secrets.randbits(32)


# ============ Console streams ============
# Resolved at call time so that redirections made after import are honoured

def stdout() -> TextIO:
    return sys.stdout


def stdin() -> TextIO:
    return sys.stdin


def stderr() -> TextIO:
    return sys.stderr
