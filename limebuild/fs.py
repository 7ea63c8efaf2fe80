"""
Filesystem probe

Existence, directory and modification-time queries plus directory-tree
creation, all expressed in terms of ``BuildPath``.
"""

import logging
import os
import stat

from .exceptions import (
    FilesystemAccessError,
    InternalInvariantViolation,
    PathNotADirectoryError,
)
from .paths import BuildPath, PathInput, as_path

logger = logging.getLogger(__name__)


def _stat(path: BuildPath):
    """Return the stat result for path, or None when it is absent or unreadable"""
    try:
        return os.stat(str(path))
    except (FileNotFoundError, NotADirectoryError, PermissionError):
        return None
    except OSError as e:
        raise FilesystemAccessError(f"unable to inspect '{path}': {e}") from e


def exists(path: PathInput) -> bool:
    """
    Check whether a path exists

    Permission-denied is reported as "does not exist" so that enumeration can
    skip inaccessible entries.

    Raises:
        FilesystemAccessError: Any other host failure
    """
    return _stat(as_path(path)) is not None


def is_directory(path: PathInput) -> bool:
    path = as_path(path)
    if not exists(path):
        return False
    st = _stat(path)
    return st is not None and stat.S_ISDIR(st.st_mode)


def get_modification_time(path: PathInput) -> int:
    """
    Read the modification time of an existing path

    Args:
        path: Path that the caller has already checked with exists()

    Returns:
        Modification time in nanoseconds since the epoch

    Raises:
        InternalInvariantViolation: The path does not exist
    """
    path = as_path(path)
    st = _stat(path)
    if st is None:
        raise InternalInvariantViolation(
            f"get_modification_time() called on '{path}', which does not exist"
        )
    return st.st_mtime_ns


def ensure_directory_path(path: PathInput) -> None:
    """
    Create every missing directory along a path

    Existing directories are left alone.

    Raises:
        PathNotADirectoryError: A segment exists but is not a directory
        FilesystemAccessError: The host refused to create a directory
    """
    target = as_path(path).to_absolute()
    current = BuildPath.root()
    for segment in target.segments:
        current = current / segment
        if exists(current):
            if not is_directory(current):
                raise PathNotADirectoryError(f"'{current}' exists and is not a directory")
            continue

        logger.debug(f"creating directory {current}")
        try:
            os.mkdir(str(current))
        except FileExistsError:
            # Lost a race with another creator; accept it if it is a directory
            if not is_directory(current):
                raise PathNotADirectoryError(f"'{current}' exists and is not a directory")
        except OSError as e:
            raise FilesystemAccessError(f"unable to create directory '{current}': {e}") from e


create_path = ensure_directory_path


__all__ = ["exists", "is_directory", "get_modification_time", "ensure_directory_path", "create_path"]
