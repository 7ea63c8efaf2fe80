"""
Path model for build scripts

A ``BuildPath`` is an immutable value made of an absolute flag and an ordered
tuple of non-empty segments. Parsing accepts both ``/`` and ``\\`` as
separators; a leading separator marks the path as absolute. The root path is
absolute with no segments.
"""

from __future__ import annotations

import errno
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .config import get_config
from .exceptions import (
    FilesystemAccessError,
    PathAbsoluteNotAllowedError,
    PathHasNoFilenameError,
    PathHasNoParentError,
    PathHierarchyInvalidError,
    PathSyntaxError,
    SymlinkCycleError,
)

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[/\\]")

PathInput = Union[str, "os.PathLike[str]", "BuildPath"]


@dataclass(frozen=True, order=True)
class BuildPath:
    """Immutable, separator-normalized path value"""

    is_absolute: bool
    segments: Tuple[str, ...] = ()

    def __post_init__(self):
        segments = tuple(self.segments)
        object.__setattr__(self, "segments", segments)
        for segment in segments:
            if not segment or _SEPARATOR_RE.search(segment):
                raise PathSyntaxError(f"invalid path segment {segment!r}")
        if not self.is_absolute and not segments:
            raise PathSyntaxError("a relative path needs at least one segment")

    # ------------------------------------------------------------------
    # Construction and rendering
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, raw: str) -> BuildPath:
        """
        Parse a raw path string

        Args:
            raw: Path text using ``/`` or ``\\`` separators

        Returns:
            Parsed path

        Raises:
            PathSyntaxError: The string is empty or holds an empty interior segment
        """
        if not isinstance(raw, str):
            raise TypeError(f"expected str, got {type(raw).__name__}")
        if raw == "":
            raise PathSyntaxError("empty path")

        parts = _SEPARATOR_RE.split(raw)
        is_absolute = parts[0] == ""
        if is_absolute:
            parts = parts[1:]
        # One trailing separator is tolerated ("bin/" is the directory "bin")
        if parts and parts[-1] == "":
            parts = parts[:-1]
        if any(part == "" for part in parts):
            raise PathSyntaxError(f"path {raw!r} contains an empty segment")
        return cls(is_absolute, tuple(parts))

    @classmethod
    def root(cls) -> BuildPath:
        return cls(True, ())

    def __str__(self) -> str:
        joined = "/".join(self.segments)
        return "/" + joined if self.is_absolute else joined

    def __repr__(self) -> str:
        return f"BuildPath({str(self)!r})"

    def __fspath__(self) -> str:
        return str(self)

    def __truediv__(self, other: PathInput) -> BuildPath:
        return self.concatenate(other)

    def __rtruediv__(self, other: PathInput) -> BuildPath:
        return as_path(other).concatenate(self)

    @property
    def is_root(self) -> bool:
        return self.is_absolute and not self.segments

    # ------------------------------------------------------------------
    # Pure segment operations
    # ------------------------------------------------------------------

    def concatenate(self, other: PathInput) -> BuildPath:
        """Append a relative path's segments onto this one"""
        right = as_path(other)
        if right.is_absolute:
            raise PathAbsoluteNotAllowedError(
                f"cannot append absolute path '{right}' to '{self}'"
            )
        return BuildPath(self.is_absolute, self.segments + right.segments)

    def get_filename(self) -> str:
        if not self.segments:
            raise PathHasNoFilenameError("the root path has no filename")
        return self.segments[-1]

    def get_parent_folder(self) -> BuildPath:
        """
        Return the path without its last segment

        A relative single-segment path names an entry of the current working
        directory, so its parent is that directory.

        Raises:
            PathHasNoParentError: The path is the root or a single segment under it
        """
        if not self.is_absolute and len(self.segments) == 1:
            return self.to_absolute().get_parent_folder()
        if len(self.segments) < 2:
            raise PathHasNoParentError(f"'{self}' has no parent folder")
        return BuildPath(self.is_absolute, self.segments[:-1])

    def remove_extension(self) -> BuildPath:
        """Drop the final ``.suffix`` of the filename; dotfiles keep their name"""
        filename = self.get_filename()
        dot = filename.rfind(".")
        if dot <= 0 or filename == "..":
            return self
        return self._with_filename(filename[:dot])

    def add_extension(self, extension: str) -> BuildPath:
        filename = self.get_filename()
        extension = extension.lstrip(".")
        if not extension:
            raise PathSyntaxError("extension must not be empty")
        return self._with_filename(f"{filename}.{extension}")

    def apply_relative_path_to(self, base: PathInput) -> BuildPath:
        """Re-root this relative path beneath ``base``"""
        return as_path(base).concatenate(self)

    def _with_filename(self, filename: str) -> BuildPath:
        return BuildPath(self.is_absolute, self.segments[:-1] + (filename,))

    # ------------------------------------------------------------------
    # Operations that consult the host
    # ------------------------------------------------------------------

    def to_absolute(self, base: Optional[PathInput] = None) -> BuildPath:
        """
        Anchor a relative path

        Args:
            base: Directory to resolve against; the current working directory
                when omitted

        Returns:
            This path if already absolute, otherwise ``base`` joined with it
        """
        if self.is_absolute:
            return self
        anchor = pwd() if base is None else as_path(base).to_absolute()
        return anchor.concatenate(self)

    def to_canonical_absolute(self, base: Optional[PathInput] = None) -> BuildPath:
        """
        Resolve ``.``, ``..`` and symbolic links along the path

        Segments that do not exist are kept as written. Each link target is
        re-parsed and its segments are resolved in turn.

        Raises:
            SymlinkCycleError: More links were followed than max_symlink_depth
        """
        max_depth = get_config().options.max_symlink_depth
        pending = list(reversed(self.to_absolute(base).segments))
        resolved: List[str] = []
        links_followed = 0

        while pending:
            segment = pending.pop()
            if segment == ".":
                continue
            if segment == "..":
                if resolved:
                    resolved.pop()
                continue

            candidate = "/" + "/".join(resolved + [segment])
            target = _read_link(candidate)
            if target is None:
                resolved.append(segment)
                continue

            links_followed += 1
            if links_followed > max_depth:
                raise SymlinkCycleError(
                    f"more than {max_depth} symbolic links while resolving '{self}'"
                )
            logger.debug(f"following link {candidate} -> {target}")
            is_absolute, target_segments = _split_link_target(target)
            if is_absolute:
                resolved = []
            pending.extend(reversed(target_segments))

        return BuildPath(True, tuple(resolved))

    def get_relative_path(self, base: PathInput) -> BuildPath:
        """
        Express this path relative to ``base``

        Both sides are canonicalized first. Only descendants of ``base`` can
        be expressed; ``.`` is returned when both resolve to the same place.

        Raises:
            PathHierarchyInvalidError: This path is not beneath ``base``
        """
        this = self.to_canonical_absolute()
        anchor = as_path(base).to_canonical_absolute()
        prefix_length = len(anchor.segments)
        if this.segments[:prefix_length] != anchor.segments:
            raise PathHierarchyInvalidError(f"'{self}' is not located beneath '{base}'")
        remainder = this.segments[prefix_length:]
        return BuildPath(False, remainder or (".",))


def _read_link(path: str) -> Optional[str]:
    """Return the target of a symbolic link, or None if path is not one"""
    try:
        return os.readlink(path)
    except (FileNotFoundError, NotADirectoryError, PermissionError):
        return None
    except OSError as e:
        if e.errno == errno.EINVAL:
            return None
        raise FilesystemAccessError(f"unable to inspect '{path}': {e}") from e


def _split_link_target(target: str) -> Tuple[bool, List[str]]:
    # Link targets are host data, so doubled separators are collapsed here
    parts = _SEPARATOR_RE.split(target)
    return parts[0] == "", [part for part in parts if part]


def parse(raw: str) -> BuildPath:
    return BuildPath.parse(raw)


def as_path(value: PathInput) -> BuildPath:
    """Coerce a string, os.PathLike or BuildPath into a BuildPath"""
    if isinstance(value, BuildPath):
        return value
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if isinstance(value, str):
        return BuildPath.parse(value)
    raise TypeError(f"cannot interpret {type(value).__name__} as a path")


def concatenate(left: PathInput, right: PathInput) -> BuildPath:
    return as_path(left).concatenate(right)


def pwd() -> BuildPath:
    """Current working directory as a path"""
    try:
        return BuildPath.parse(os.getcwd())
    except OSError as e:
        raise FilesystemAccessError(f"unable to read the working directory: {e}") from e


__all__ = ["BuildPath", "PathInput", "parse", "as_path", "concatenate", "pwd"]
