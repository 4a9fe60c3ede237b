"""
Kaede Runtime File System Module

Whole-file read/write, path composition, metadata and directory mutation
for compiled programs.

Every operation is built on host.py requests that return a HostResult.
Failures are folded into the boolean, None, -1 or empty-list results of
this module at the boundary; nothing here raises on a host failure. Each
file is opened and closed within a single call.
"""

import stat as stat_mode
import errno
import logging
from typing import List, Optional, Sequence

from . import host
from .config import RuntimeConfig, get_config
from .results import HostResult

logger = logging.getLogger('KaedeRT.fs')


class FileSystemModule:
    """File and directory operations"""

    def __init__(self, config: Optional[RuntimeConfig] = None):
        self._config = config

    @property
    def config(self) -> RuntimeConfig:
        return self._config if self._config is not None else get_config()

    @property
    def encoding(self) -> str:
        return self.config.file_encoding

    # ============ Whole-file read/write ============

    def read_file(self, path: str) -> Optional[str]:
        """
        Read a whole file

        Args:
            path: File path

        Returns:
            File contents, or None if the file cannot be opened or read
        """
        result = host.read_text(path, self.encoding)
        if not result.ok:
            return None
        return result.value

    def write_file(self, path: str, content: str) -> bool:
        """Truncate and overwrite a file"""
        return host.write_text(path, content, self.encoding).ok

    def append_file(self, path: str, content: str) -> bool:
        return host.write_text(path, content, self.encoding, append=True).ok

    def read_lines(self, path: str) -> List[str]:
        """
        Read a file as lines

        Lines are split on '\\n' with one trailing '\\r' removed from each;
        a final terminator does not produce an empty last line.

        Returns:
            List of lines, empty if the file cannot be read
        """
        content = self.read_file(path)
        if not content:
            return []
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def write_lines(self, path: str, lines: Sequence[str]) -> bool:
        """Write lines, each followed by '\\n'"""
        return self.write_file(path, "".join(line + "\n" for line in lines))

    # ============ Metadata ============

    @staticmethod
    def _mode(path: str) -> Optional[int]:
        result = host.stat(path)
        return result.value.st_mode if result.ok else None

    def exists(self, path: str) -> bool:
        return self._mode(path) is not None

    def is_file(self, path: str) -> bool:
        mode = self._mode(path)
        return mode is not None and stat_mode.S_ISREG(mode)

    def is_dir(self, path: str) -> bool:
        mode = self._mode(path)
        return mode is not None and stat_mode.S_ISDIR(mode)

    @staticmethod
    def file_size(path: str) -> int:
        """Size in bytes of a regular file, -1 for anything else"""
        result = host.stat(path)
        if not result.ok or not stat_mode.S_ISREG(result.value.st_mode):
            return -1
        return result.value.st_size

    # ============ Path decomposition ============

    @staticmethod
    def extension(path: str) -> str:
        """Extension including the dot, '' when there is none"""
        return host.split_extension(path)[1]

    @staticmethod
    def filename(path: str) -> str:
        return host.base_name(path)

    @staticmethod
    def parent(path: str) -> str:
        return host.dir_name(path)

    @staticmethod
    def join(first: str, *rest: str) -> str:
        return host.join_path(first, *rest)

    @staticmethod
    def absolute(path: str) -> str:
        return host.absolute_path(path)

    # ============ Directory mutation ============

    @staticmethod
    def mkdir(path: str) -> bool:
        """Create one directory level; fails if the parent is missing or path exists"""
        return host.make_dir(path).ok

    def mkdirp(self, path: str) -> bool:
        """Create every missing level; True when the directory exists afterwards"""
        if not host.make_dirs(path).ok:
            return False
        return self.is_dir(path)

    def remove(self, path: str) -> bool:
        """Delete a file or an empty directory"""
        result = host.stat(path, follow_symlinks=False)
        if not result.ok:
            return False
        if stat_mode.S_ISDIR(result.value.st_mode):
            return host.remove_dir(path).ok
        return host.remove_file(path).ok

    def remove_all(self, path: str) -> int:
        """
        Delete a path recursively

        Returns:
            Number of entries removed, 0 for a nonexistent path
        """
        result = host.stat(path, follow_symlinks=False)
        if not result.ok:
            return 0
        if not stat_mode.S_ISDIR(result.value.st_mode):
            return 1 if host.remove_file(path).ok else 0

        removed = 0
        entries = host.walk_bottom_up(path).unwrap_or([])
        for entry, is_directory in entries:
            outcome = host.remove_dir(entry) if is_directory else host.remove_file(entry)
            if outcome.ok:
                removed += 1
        if host.remove_dir(path).ok:
            removed += 1
        else:
            logger.warning(f"remove_all {path}: {removed} entries removed, directory kept")
        return removed

    # ============ Copy and move ============

    def copy(self, src: str, dst: str) -> bool:
        """Copy a file (or a directory tree), overwriting the destination"""
        if self.is_dir(src):
            return host.copy_tree(src, dst).ok
        return host.copy_file(src, dst).ok

    @staticmethod
    def move(src: str, dst: str) -> bool:
        """Rename src to dst, replacing dst; falls back to copy-and-delete across devices"""
        result = host.rename(src, dst)
        if result.ok:
            return True
        if _is_cross_device(result):
            return host.move_across_devices(src, dst).ok
        return False

    # ============ Listing ============

    @staticmethod
    def list_dir(path: str) -> List[str]:
        """Names of the immediate children, in host order"""
        return host.list_dir(path).unwrap_or([])

    # ============ Working directory ============

    @staticmethod
    def cwd() -> str:
        return host.get_cwd().unwrap_or("")

    @staticmethod
    def chdir(path: str) -> bool:
        return host.set_cwd(path).ok


def _is_cross_device(result: HostResult) -> bool:
    return result.code == errno.EXDEV
