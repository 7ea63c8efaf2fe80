"""
Directory enumeration

Pattern expansion runs relative to an explicit base directory, so the
process working directory is never changed and every returned path is
absolute.
"""

import glob
import logging
from typing import List

from .exceptions import PathNotADirectoryError
from .fs import is_directory
from .paths import BuildPath, PathInput, as_path

logger = logging.getLogger(__name__)

_PSEUDO_ENTRIES = {".", ".."}


def enum_files(directory: PathInput, pattern: str) -> List[BuildPath]:
    """
    List the entries of a directory that match a glob pattern

    Args:
        directory: Directory to search; relative paths resolve against the
            current working directory
        pattern: Shell-style pattern such as ``*.cpp`` or ``.*``

    Returns:
        Absolute paths of the matches, sorted

    Raises:
        PathNotADirectoryError: ``directory`` is not a directory
    """
    base = as_path(directory).to_absolute()
    if not is_directory(base):
        raise PathNotADirectoryError(f"cannot enumerate '{base}': not a directory")

    matches = glob.glob(pattern, root_dir=str(base))
    results = []
    for match in sorted(matches):
        if "\\" in match:
            logger.warning(f"skipping '{base}/{match}': backslash in a file name")
            continue
        relative = BuildPath.parse(match)
        if relative.get_filename() in _PSEUDO_ENTRIES:
            continue
        results.append(relative.to_absolute(base))

    logger.debug(f"{base}: {len(results)} entries match {pattern!r}")
    return results


def enum_files_recursive(directory: PathInput, pattern: str) -> List[BuildPath]:
    """
    List matching files beneath a directory, descending into subdirectories

    Every subdirectory is searched, whether or not its own name matches the
    pattern, and its results take the place of the directory entry.
    Directories themselves are never returned.
    """
    base = as_path(directory).to_absolute()
    matched = set(enum_files(base, pattern))
    entries = matched.union(enum_files(base, "*"))

    results = []
    for entry in sorted(entries):
        if is_directory(entry):
            results.extend(enum_files_recursive(entry, pattern))
        elif entry in matched:
            results.append(entry)
    return results


__all__ = ["enum_files", "enum_files_recursive"]
